from flask import current_app

from app.extensions import db
from app.models.enums import NotificationType, ReviewType
from app.models.review import Review
from app.repositories.lending_repo import LendingRepo
from app.repositories.review_repo import ReviewRepo
from app.repositories.user_repo import UserRepo
from app.services.notification_service import NotificationService
from app.utils.errors import Forbidden, InvalidArgument, InvalidState, NotFound


class ReviewService:
    @staticmethod
    def refresh_user_rating(user_id: int):
        """Recompute rating/review_count from stored reviews; no commit."""
        user = UserRepo.get_by_id(user_id)
        if not user:
            return
        avg, count = ReviewRepo.rating_stats(user_id)
        user.rating = round(avg, 2)
        user.review_count = count

    @staticmethod
    def create(reviewer_id: int, lending_request_id: int, reviewee_id: int, rating: int,
               comment: str, categories: dict | None = None) -> Review:
        req = LendingRepo.get(lending_request_id)
        if not req:
            raise NotFound("Lending request not found")

        parties = (req.borrower_id, req.lender_id)
        if reviewer_id not in parties:
            raise Forbidden("Not authorized to review this transaction")
        if reviewee_id not in parties or reviewee_id == reviewer_id:
            raise InvalidArgument("Reviewee must be the other party of this transaction")

        if ReviewRepo.find_existing(req.id, reviewer_id, reviewee_id):
            raise InvalidState("You have already reviewed this transaction")

        # a lender reviews the borrower and vice versa
        review_type = ReviewType.BORROWER if req.lender_id == reviewer_id else ReviewType.LENDER

        review = Review(
            lending_request_id=req.id,
            reviewer_id=reviewer_id,
            reviewee_id=reviewee_id,
            item_id=req.item_id,
            rating=rating,
            comment=comment,
            type=review_type.value,
            categories=categories,
        )
        try:
            ReviewRepo.add(review)
            ReviewService.refresh_user_rating(reviewee_id)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"[review] review={review.id} request={req.id} by user={reviewer_id}")

        NotificationService.emit(
            reviewee_id,
            NotificationType.REVIEW,
            "New review",
            f"You received a {rating}-star review",
            related_id=review.id,
        )
        return review

    @staticmethod
    def list_for_user(user_id: int):
        return ReviewRepo.list_for_reviewee(user_id)
