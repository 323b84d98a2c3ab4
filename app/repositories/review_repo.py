from sqlalchemy import func

from app.models.review import Review
from app.extensions import db


class ReviewRepo:
    @staticmethod
    def get(review_id: int):
        return db.session.get(Review, review_id)

    @staticmethod
    def find_existing(lending_request_id: int, reviewer_id: int, reviewee_id: int):
        return Review.query.filter_by(
            lending_request_id=lending_request_id,
            reviewer_id=reviewer_id,
            reviewee_id=reviewee_id,
        ).first()

    @staticmethod
    def list_for_reviewee(user_id: int):
        return Review.query.filter_by(reviewee_id=user_id).order_by(Review.id.desc()).all()

    @staticmethod
    def rating_stats(user_id: int):
        avg, count = (
            db.session.query(func.avg(Review.rating), func.count(Review.id))
            .filter(Review.reviewee_id == user_id)
            .one()
        )
        return float(avg or 0), int(count or 0)

    @staticmethod
    def add(review: Review):
        db.session.add(review)
        db.session.flush()
        return review

    @staticmethod
    def delete(review: Review):
        db.session.delete(review)
        db.session.flush()
