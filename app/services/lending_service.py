from datetime import datetime

from flask import current_app

from app.models.enums import Availability, LendingStatus, NotificationType
from app.models.lending_message import LendingMessage
from app.models.lending_request import LendingRequest
from app.repositories.item_repo import ItemRepo
from app.repositories.lending_repo import LendingRepo
from app.services import lending_rules
from app.services.lending_rules import HOLDS_ITEM, ensure_transition, sources_for
from app.services.notification_service import NotificationService
from app.utils.errors import Forbidden, InvalidArgument, InvalidOperation, InvalidState, NotFound

S = LendingStatus


def _utcnow() -> datetime:
    return datetime.utcnow()


class LendingService:
    @staticmethod
    def _get(request_id: int) -> LendingRequest:
        req = LendingRepo.get(request_id)
        if not req:
            raise NotFound("Lending request not found")
        return req

    @staticmethod
    def _apply(fn):
        """Run the writes of one operation and commit them together."""
        try:
            fn()
            LendingRepo.commit()
        except Exception:
            LendingRepo.rollback()
            raise

    @staticmethod
    def _validate_dates(start_date, end_date):
        if not start_date or not end_date:
            raise InvalidArgument("Start date and end date are required")

        today = _utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
        if start_date < today:
            raise InvalidArgument("Start date cannot be in the past")
        if end_date <= start_date:
            raise InvalidArgument("End date must be after start date")

        days = lending_rules.rental_days(start_date, end_date)
        max_days = current_app.config.get("MAX_RENTAL_DAYS", 365)
        if days > max_days:
            raise InvalidArgument(f"Rental period cannot exceed {max_days} days")
        return days

    @staticmethod
    def create(item_id: int, borrower_id: int, start_date, end_date, message=None,
               pickup_location=None, return_location=None) -> LendingRequest:
        item = ItemRepo.get(item_id)
        if not item:
            raise NotFound("Item not found")

        if item.owner_id == borrower_id:
            raise InvalidOperation("Cannot borrow your own item")

        LendingService._validate_dates(start_date, end_date)

        if not item.is_active:
            raise NotFound("Item not found")

        if item.availability != Availability.AVAILABLE.value:
            raise InvalidState("Item is not available")

        req = LendingRequest(
            item_id=item.id,
            borrower_id=borrower_id,
            lender_id=item.owner_id,
            start_date=start_date,
            end_date=end_date,
            status=S.PENDING.value,
            total_cost=lending_rules.total_cost(start_date, end_date, item.daily_rate),
            security_deposit=item.security_deposit,
            message=message,
            pickup_location=pickup_location,
            return_location=return_location,
        )
        LendingRepo.create(req)
        current_app.logger.info(
            f"[lending] request={req.id} created item={item.id} borrower={borrower_id} total={req.total_cost}"
        )

        borrower_name = req.borrower.name if req.borrower and req.borrower.name else "Someone"
        NotificationService.emit(
            item.owner_id,
            NotificationType.LENDING_REQUEST,
            "New Lending Request",
            f"{borrower_name} wants to borrow your {item.title}",
            related_id=req.id,
            link=f"/lending/{req.id}",
        )
        return req

    @staticmethod
    def accept(request_id: int, acting_user_id: int) -> LendingRequest:
        req = LendingService._get(request_id)
        if req.lender_id != acting_user_id:
            raise Forbidden("Not authorized to accept this request")

        ensure_transition(
            req.status, S.ACCEPTED,
            f"Request cannot be accepted. Current status: {req.status}",
        )

        def writes():
            # one rental at a time per item
            if not ItemRepo.set_availability_if(req.item_id, Availability.AVAILABLE.value,
                                                Availability.RENTED.value, active_only=True):
                raise InvalidState("Item is not available")
            if not LendingRepo.transition(req.id, sources_for(S.ACCEPTED), S.ACCEPTED.value):
                raise InvalidState("Request cannot be accepted. It was changed by another action")

        LendingService._apply(writes)
        current_app.logger.info(f"[lending] request={req.id} accepted by lender={acting_user_id}")

        NotificationService.emit(
            req.borrower_id,
            NotificationType.REQUEST_ACCEPTED,
            "Request Accepted",
            f"Your request to borrow {req.item.title} has been accepted",
            related_id=req.id,
            link=f"/lending/{req.id}",
        )
        return req

    @staticmethod
    def reject(request_id: int, acting_user_id: int, reason: str | None = None) -> LendingRequest:
        req = LendingService._get(request_id)
        if req.lender_id != acting_user_id:
            raise Forbidden("Not authorized to reject this request")

        ensure_transition(
            req.status, S.REJECTED,
            f"Only pending requests can be rejected. Current status: {req.status}",
        )

        def writes():
            if not LendingRepo.transition(req.id, sources_for(S.REJECTED), S.REJECTED.value,
                                          cancellation_reason=reason):
                raise InvalidState("Request cannot be rejected. It was changed by another action")

        LendingService._apply(writes)
        current_app.logger.info(f"[lending] request={req.id} rejected by lender={acting_user_id}")

        NotificationService.emit(
            req.borrower_id,
            NotificationType.REQUEST_REJECTED,
            "Request Rejected",
            f"Your request to borrow {req.item.title} was declined",
            related_id=req.id,
        )
        return req

    @staticmethod
    def cancel(request_id: int, acting_user_id: int, reason: str | None = None) -> LendingRequest:
        req = LendingService._get(request_id)
        is_borrower = req.borrower_id == acting_user_id
        is_lender = req.lender_id == acting_user_id
        if not is_borrower and not is_lender:
            raise Forbidden("Not authorized")

        current = S(req.status)
        if is_lender and not is_borrower and current == S.PENDING:
            raise InvalidState("Pending requests are rejected by the lender, not cancelled")

        ensure_transition(
            current, S.CANCELLED,
            f"Request cannot be cancelled. Current status: {req.status}",
        )

        def writes():
            if not LendingRepo.transition(req.id, [current.value], S.CANCELLED.value,
                                          cancellation_reason=reason):
                raise InvalidState("Request cannot be cancelled. It was changed by another action")
            if current in HOLDS_ITEM:
                ItemRepo.set_availability_if(req.item_id, Availability.RENTED.value, Availability.AVAILABLE.value)

        LendingService._apply(writes)
        current_app.logger.info(f"[lending] request={req.id} cancelled by user={acting_user_id} (was {current.value})")

        other = req.lender_id if is_borrower else req.borrower_id
        NotificationService.emit(
            other,
            NotificationType.SYSTEM,
            "Request Cancelled",
            f"The request to borrow {req.item.title} was cancelled",
            related_id=req.id,
            link=f"/lending/{req.id}",
        )
        return req

    @staticmethod
    def complete(request_id: int, acting_user_id: int) -> LendingRequest:
        req = LendingService._get(request_id)
        if acting_user_id not in (req.lender_id, req.borrower_id):
            raise Forbidden("Not authorized")

        ensure_transition(
            req.status, S.COMPLETED,
            f"Only accepted or active requests can be completed. Current status: {req.status}",
        )

        returned_at = _utcnow()
        late_days, fee = lending_rules.late_fee(req.end_date, returned_at, req.item.daily_rate)

        def writes():
            if not LendingRepo.transition(
                req.id, sources_for(S.COMPLETED), S.COMPLETED.value,
                actual_return_date=returned_at,
                late_return_days=late_days,
                late_fee=fee,
            ):
                raise InvalidState("Request cannot be completed. It was changed by another action")
            ItemRepo.set_availability_if(req.item_id, Availability.RENTED.value, Availability.AVAILABLE.value)

        LendingService._apply(writes)
        current_app.logger.info(
            f"[lending] request={req.id} completed by user={acting_user_id} late_days={late_days} late_fee={fee}"
        )
        return req

    @staticmethod
    def list_for_user(user_id: int, role: str = "all", status: str | None = None):
        return LendingRepo.list_for_user(user_id, role, status)

    @staticmethod
    def get_for_party(request_id: int, user_id: int) -> LendingRequest:
        req = LendingService._get(request_id)
        if user_id not in (req.lender_id, req.borrower_id):
            raise Forbidden("Not authorized to view this request")
        return req

    @staticmethod
    def list_messages(request_id: int, user_id: int):
        req = LendingService.get_for_party(request_id, user_id)
        return LendingRepo.list_messages(req.id)

    @staticmethod
    def send_message(request_id: int, user_id: int, content: str) -> LendingMessage:
        content = (content or "").strip()
        if not content:
            raise InvalidArgument("Message content is required")

        req = LendingService.get_for_party(request_id, user_id)
        msg = LendingRepo.add_message(LendingMessage(request_id=req.id, sender_id=user_id, content=content))

        other = req.lender_id if req.borrower_id == user_id else req.borrower_id
        NotificationService.emit(
            other,
            NotificationType.MESSAGE,
            "New message",
            "You have a new chat message",
            related_id=req.id,
            link=f"/lending/{req.id}/chat",
        )
        return msg
