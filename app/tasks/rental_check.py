# app/tasks/rental_check.py
from datetime import datetime, timedelta
from flask import current_app

from app.extensions import db
from app.models.enums import LendingStatus, NotificationType
from app.repositories.lending_repo import LendingRepo
from app.repositories.notification_repo import NotificationRepo
from app.services.lending_rules import sources_for
from app.services.notification_service import NotificationService


def _activate_started(now: datetime) -> int:
    activated = 0
    for r in LendingRepo.find_to_activate(now):
        if LendingRepo.transition(r.id, sources_for(LendingStatus.ACTIVE), LendingStatus.ACTIVE.value):
            activated += 1
    db.session.commit()
    return activated


def _notify_once(rows, notif_type, title, make_message) -> int:
    sent = 0
    for r in rows:
        if NotificationRepo.already_sent(r.id, notif_type.value):
            continue
        title_of_item = r.item.title if r.item else "item"
        n = NotificationService.emit(
            r.borrower_id,
            notif_type,
            title,
            make_message(title_of_item, r.end_date),
            related_id=r.id,
            link=f"/lending/{r.id}",
        )
        if n:
            sent += 1
    return sent


def check_rentals():
    """
    Runs in the current app context.
    - Accepted requests whose start date has arrived become Active.
    - overdue: Accepted/Active past end_date -> one LateReturn notification
    - due_soon: end_date within 24h -> one ReturnReminder notification
    """
    now = datetime.utcnow()
    due_soon_limit = now + timedelta(days=1)

    activated = _activate_started(now)

    overdue_rows = LendingRepo.find_overdue(now)
    due_soon_rows = LendingRepo.find_due_soon(now, due_soon_limit)

    late_sent = _notify_once(
        overdue_rows,
        NotificationType.LATE_RETURN,
        "Overdue return",
        lambda title, end: (
            f"Your rental of {title} was due on {end:%Y-%m-%d}. "
            "Please return it as soon as possible."
        ),
    )
    reminders_sent = _notify_once(
        due_soon_rows,
        NotificationType.RETURN_REMINDER,
        "Return reminder",
        lambda title, end: f"Your rental of {title} is due on {end:%Y-%m-%d %H:%M} UTC.",
    )

    current_app.logger.info(
        f"[rental_check] activated={activated} overdue={len(overdue_rows)} "
        f"due_soon={len(due_soon_rows)} late_notified={late_sent} reminders_sent={reminders_sent}"
    )
    return {
        "activated": activated,
        "overdue": len(overdue_rows),
        "dueSoon": len(due_soon_rows),
        "lateNotified": late_sent,
        "remindersSent": reminders_sent,
    }


def run_rental_check_job(app):
    """Scheduler entry point: own app context, errors logged and rolled back."""
    with app.app_context():
        try:
            return check_rentals()
        except Exception as e:
            db.session.rollback()
            current_app.logger.exception(f"[rental_check] Error: {e}")
            return None
