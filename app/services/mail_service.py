# app/services/mail_service.py
from __future__ import annotations

from flask import current_app
from flask_mail import Message

from app.extensions import mail


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str) -> tuple[bool, str | None]:
        """
        return: (success, error_text)
        """
        try:
            msg = Message(subject=subject, recipients=[to_email], body=body)
            mail.send(msg)
            return True, None
        except Exception as e:
            current_app.logger.warning(f"[mail] Could not send to {to_email}: {e}")
            return False, str(e)

    @staticmethod
    def send_notification_mail(user, title: str, message: str) -> bool:
        to_email = getattr(user, "email", None) if user else None
        if not to_email:
            return False

        name = getattr(user, "name", None) or "there"
        body = (
            f"Hi {name},\n\n"
            f"{message}\n\n"
            "-- CampusCrate\n"
        )
        ok, _err = MailService.send_email(to_email, f"CampusCrate: {title}", body)
        return ok
