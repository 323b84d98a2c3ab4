from datetime import datetime

from sqlalchemy import or_, update

from app.models.lending_request import LendingRequest
from app.models.lending_message import LendingMessage
from app.extensions import db


class LendingRepo:
    @staticmethod
    def get(request_id: int):
        return db.session.get(LendingRequest, request_id)

    @staticmethod
    def list_for_user(user_id: int, role: str = "all", status: str | None = None):
        q = LendingRequest.query
        if role == "borrowing":
            q = q.filter(LendingRequest.borrower_id == user_id)
        elif role == "lending":
            q = q.filter(LendingRequest.lender_id == user_id)
        else:
            q = q.filter(or_(
                LendingRequest.borrower_id == user_id,
                LendingRequest.lender_id == user_id,
            ))
        if status:
            q = q.filter(LendingRequest.status == status)
        return q.order_by(LendingRequest.id.desc()).all()

    @staticmethod
    def create(req: LendingRequest):
        db.session.add(req)
        db.session.commit()
        return req

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def rollback():
        db.session.rollback()

    @staticmethod
    def transition(request_id: int, from_statuses, to_status: str, **values) -> bool:
        """
        Conditional status change: only applied while the row is still in one
        of from_statuses. No commit.
        """
        result = db.session.execute(
            update(LendingRequest)
            .where(
                LendingRequest.id == request_id,
                LendingRequest.status.in_(list(from_statuses)),
            )
            .values(status=to_status, updated_at=datetime.utcnow(), **values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def find_to_activate(now: datetime):
        return LendingRequest.query.filter(
            LendingRequest.status == "Accepted",
            LendingRequest.start_date <= now,
        ).all()

    @staticmethod
    def find_overdue(now: datetime):
        return LendingRequest.query.filter(
            LendingRequest.status.in_(["Accepted", "Active"]),
            LendingRequest.end_date < now,
        ).all()

    @staticmethod
    def find_due_soon(now: datetime, limit: datetime):
        return LendingRequest.query.filter(
            LendingRequest.status.in_(["Accepted", "Active"]),
            LendingRequest.end_date >= now,
            LendingRequest.end_date <= limit,
        ).all()

    @staticmethod
    def list_messages(request_id: int):
        return (
            LendingMessage.query
            .filter_by(request_id=request_id)
            .order_by(LendingMessage.created_at.asc(), LendingMessage.id.asc())
            .all()
        )

    @staticmethod
    def add_message(msg: LendingMessage):
        db.session.add(msg)
        db.session.commit()
        return msg

    @staticmethod
    def holding_item(item_id: int):
        """Request currently holding the item (Accepted or Active), if any."""
        return LendingRequest.query.filter(
            LendingRequest.item_id == item_id,
            LendingRequest.status.in_(["Accepted", "Active"]),
        ).first()

    @staticmethod
    def pending_for_item(item_id: int):
        return LendingRequest.query.filter(
            LendingRequest.item_id == item_id,
            LendingRequest.status == "Pending",
        ).all()
