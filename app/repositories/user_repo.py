from sqlalchemy import func, select, update
from sqlalchemy.orm import aliased

from app.models.user import User
from app.extensions import db


class UserRepo:
    @staticmethod
    def get_by_email(email: str):
        return User.query.filter_by(email=email).first()

    @staticmethod
    def get_by_id(user_id: int):
        return db.session.get(User, user_id)

    @staticmethod
    def list_all():
        return User.query.order_by(User.id.desc()).all()

    @staticmethod
    def create(user: User):
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def count_admins(active_only: bool = False) -> int:
        q = User.query.filter(User.role == "admin")
        if active_only:
            q = q.filter(User.is_active.is_(True))
        return q.count()

    @staticmethod
    def _lock_admins():
        # row locks on backends that support FOR UPDATE; sqlite serializes writers anyway
        db.session.execute(select(User.id).where(User.role == "admin").with_for_update())

    @staticmethod
    def demote_admin_unless_last(user_id: int) -> bool:
        """
        role=admin -> user in a single conditional UPDATE.
        Returns False when the row was not updated (no longer admin, or last admin).
        """
        UserRepo._lock_admins()
        other = aliased(User)
        admins = (
            select(func.count(other.id))
            .where(other.role == "admin")
            .scalar_subquery()
        )
        result = db.session.execute(
            update(User)
            .where(User.id == user_id, User.role == "admin", admins > 1)
            .values(role="user")
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def deactivate_unless_last_admin(user_id: int) -> bool:
        UserRepo._lock_admins()
        other = aliased(User)
        active_admins = (
            select(func.count(other.id))
            .where(other.role == "admin", other.is_active.is_(True))
            .scalar_subquery()
        )
        result = db.session.execute(
            update(User)
            .where(
                User.id == user_id,
                (User.role != "admin") | (active_admins > 1),
            )
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
