from datetime import datetime

from flask import current_app
from sqlalchemy.exc import IntegrityError

from app.extensions import db
from app.models.enums import NotificationType, VerificationStatus, values
from app.models.verification_request import VerificationMessage, VerificationRequest
from app.repositories.user_repo import UserRepo
from app.repositories.verification_repo import VerificationRepo
from app.services.notification_service import NotificationService
from app.utils.errors import InvalidArgument, InvalidState, NotFound

NOTIFICATION_PREVIEW_CHARS = 140


class VerificationService:
    @staticmethod
    def _get(request_id: int) -> VerificationRequest:
        req = VerificationRepo.get(request_id)
        if not req:
            raise NotFound("Request not found")
        return req

    @staticmethod
    def _reset(req: VerificationRequest, message: str | None):
        req.message = message or req.message
        req.status = VerificationStatus.PENDING.value
        req.admin_note = ""
        req.reviewed_by_id = None
        req.reviewed_at = None
        VerificationRepo.commit()

    @staticmethod
    def submit(user_id: int, message: str | None = None) -> VerificationRequest:
        """One request per user: a resubmission resets the existing row to pending."""
        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        if user.is_verified:
            raise InvalidState("User is already verified")

        req = VerificationRepo.get_by_user(user_id)
        if req:
            VerificationService._reset(req, message)
        else:
            try:
                req = VerificationRepo.create(VerificationRequest(user_id=user_id, message=message or ""))
            except IntegrityError:
                # a concurrent first submission inserted the row
                db.session.rollback()
                req = VerificationRepo.get_by_user(user_id)
                if not req:
                    raise
                VerificationService._reset(req, message)

        current_app.logger.info(f"[verification] request={req.id} submitted by user={user_id}")
        return req

    @staticmethod
    def get_for_user(user_id: int):
        return VerificationRepo.get_by_user(user_id)

    @staticmethod
    def list_requests(status: str | None = None):
        return VerificationRepo.list_all(status)

    @staticmethod
    def review(admin_id: int, request_id: int, status: str, admin_note: str | None = None) -> VerificationRequest:
        if status not in values(VerificationStatus):
            raise InvalidArgument("Invalid status")

        req = VerificationService._get(request_id)

        req.status = status
        req.admin_note = admin_note or req.admin_note
        req.reviewed_by_id = admin_id
        req.reviewed_at = datetime.utcnow()

        if status == VerificationStatus.APPROVED.value and req.user and not req.user.is_verified:
            req.user.is_verified = True

        VerificationRepo.commit()
        current_app.logger.info(f"[verification] request={req.id} -> {status} by admin={admin_id}")

        NotificationService.emit(
            req.user_id,
            NotificationType.VERIFICATION,
            "Verification update",
            f"Your verification request is {status}.",
            related_id=req.id,
            link="/profile",
        )
        return req

    @staticmethod
    def post_admin_message(admin_id: int, request_id: int, content: str) -> VerificationRequest:
        content = (content or "").strip()
        if not content:
            raise InvalidArgument("Message content required")

        req = VerificationService._get(request_id)
        req.admin_messages.append(VerificationMessage(sender_id=admin_id, content=content))
        VerificationRepo.commit()

        NotificationService.emit(
            req.user_id,
            NotificationType.VERIFICATION_MESSAGE,
            "Verification message",
            content[:NOTIFICATION_PREVIEW_CHARS],
            related_id=req.id,
            link="/profile",
        )
        return req
