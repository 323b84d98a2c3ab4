# app/tasks/scheduler.py
from __future__ import annotations

import os


def start_scheduler(app):
    """
    Runs the rental check on an interval.
    - Disabled with SCHEDULER_ENABLED=0 (tests do this).
    - Under the debug reloader only the serving process starts it.
    - Stopped on interpreter exit.
    """
    if not app.config.get("SCHEDULER_ENABLED", True):
        app.logger.info("[scheduler] Disabled by config.")
        return None

    # Werkzeug's reloader runs two processes; WERKZEUG_RUN_MAIN=true marks the real one
    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    from apscheduler.schedulers.background import BackgroundScheduler
    from apscheduler.triggers.interval import IntervalTrigger

    from app.tasks.rental_check import run_rental_check_job

    minutes = app.config.get("RENTAL_CHECK_MINUTES", 10)
    scheduler = BackgroundScheduler(timezone="UTC")

    def _job_wrapper():
        try:
            run_rental_check_job(app)
        except Exception as ex:
            app.logger.exception(f"[scheduler] rental_check_job error: {ex}")

    scheduler.add_job(
        func=_job_wrapper,
        trigger=IntervalTrigger(minutes=minutes),
        id="rental_check_job",
        replace_existing=True,
        max_instances=1,        # no overlapping runs
        coalesce=True,          # collapse missed runs into one
        misfire_grace_time=120
    )

    scheduler.start()
    app.logger.info(f"[scheduler] Rental check job started (every {minutes} minutes).")

    app.extensions["apscheduler"] = scheduler

    import atexit
    atexit.register(lambda: scheduler.shutdown(wait=False) if scheduler.running else None)
    return scheduler
