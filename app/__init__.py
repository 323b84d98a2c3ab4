import logging

from flask import Flask, jsonify
from app.config import Config
from app.extensions import db, migrate, jwt, mail
from app.utils.errors import register_error_handlers


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    # 1) extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    # 2) error envelope {"success": false, "message": ...}
    register_error_handlers(app, jwt)

    # 3) API blueprints (models are imported through them)
    from app.controllers.auth_controller import auth_bp
    from app.controllers.item_controller import item_bp
    from app.controllers.lending_controller import lending_bp
    from app.controllers.admin_controller import admin_bp
    from app.controllers.verification_controller import verification_bp
    from app.controllers.review_controller import review_bp
    from app.controllers.report_controller import report_bp
    from app.controllers.user_controller import user_bp
    from app.controllers.notification_controller import notif_bp
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(item_bp, url_prefix="/items")
    app.register_blueprint(lending_bp, url_prefix="/lending")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(verification_bp, url_prefix="/verification-requests")
    app.register_blueprint(review_bp, url_prefix="/reviews")
    app.register_blueprint(report_bp, url_prefix="/reports")
    app.register_blueprint(user_bp, url_prefix="/users")
    app.register_blueprint(notif_bp, url_prefix="/notifications")

    from app.commands import register_commands
    register_commands(app)

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    # Scheduler (rental activation / overdue check)
    from app.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
