from app.models.notification import Notification
from app.extensions import db


class NotificationRepo:
    @staticmethod
    def already_sent(related_id: int, notif_type: str) -> bool:
        return Notification.query.filter_by(related_id=related_id, type=notif_type).first() is not None

    @staticmethod
    def log(entry: Notification):
        db.session.add(entry)
        db.session.commit()
        return entry

    @staticmethod
    def get(notification_id: int):
        return db.session.get(Notification, notification_id)

    @staticmethod
    def list_for_user(user_id: int, unread_only: bool = False):
        q = Notification.query.filter_by(user_id=user_id)
        if unread_only:
            q = q.filter(Notification.is_read.is_(False))
        return q.order_by(Notification.id.desc()).all()

    @staticmethod
    def mark_all_read(user_id: int) -> int:
        count = (
            Notification.query
            .filter_by(user_id=user_id, is_read=False)
            .update({"is_read": True}, synchronize_session=False)
        )
        db.session.commit()
        return count

    @staticmethod
    def commit():
        db.session.commit()
