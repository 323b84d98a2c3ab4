from flask import current_app

from app.extensions import db
from app.models.notification import Notification
from app.repositories.notification_repo import NotificationRepo
from app.repositories.user_repo import UserRepo
from app.services.mail_service import MailService
from app.utils.errors import NotFound, Forbidden


class NotificationService:
    @staticmethod
    def emit(user_id, notif_type, title, message, related_id=None, link=None):
        """
        Best-effort: creates one Notification row in its own commit. Never raises,
        so it must be called after the triggering operation has committed.
        """
        if user_id is None:
            return None

        try:
            entry = Notification(
                user_id=user_id,
                type=getattr(notif_type, "value", notif_type),
                title=title,
                message=message,
                related_id=related_id,
                link=link,
            )
            NotificationRepo.log(entry)
        except Exception as e:
            db.session.rollback()
            current_app.logger.warning(f"[notify] Failed to create {notif_type} for user={user_id}: {e}")
            return None

        if current_app.config.get("NOTIFY_BY_MAIL"):
            try:
                MailService.send_notification_mail(UserRepo.get_by_id(user_id), title, message)
            except Exception as e:
                current_app.logger.warning(f"[notify] Mail for notification={entry.id} failed: {e}")

        return entry

    @staticmethod
    def list_for_user(user_id: int, unread_only: bool = False):
        return NotificationRepo.list_for_user(user_id, unread_only)

    @staticmethod
    def mark_read(notification_id: int, user_id: int):
        n = NotificationRepo.get(notification_id)
        if not n:
            raise NotFound("Notification not found")
        if n.user_id != user_id:
            raise Forbidden("Not authorized")

        n.is_read = True
        NotificationRepo.commit()
        return n

    @staticmethod
    def mark_all_read(user_id: int) -> int:
        return NotificationRepo.mark_all_read(user_id)
