from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from app.schemas import ReviewCreateIn
from app.services.review_service import ReviewService
from app.utils.decorators import current_user_id
from app.utils.serializers import review_json

review_bp = Blueprint("reviews", __name__)


@review_bp.post("")
@jwt_required()
def create_review():
    data = ReviewCreateIn.model_validate(request.get_json(silent=True) or {})
    r = ReviewService.create(
        reviewer_id=current_user_id(),
        lending_request_id=data.booking_id,
        reviewee_id=data.to_user_id,
        rating=data.rating,
        comment=data.comment,
        categories=data.categories,
    )
    return jsonify({"success": True, "message": "Review created successfully", "data": review_json(r)}), 201


@review_bp.get("/user/<int:user_id>")
def user_reviews(user_id: int):
    rows = ReviewService.list_for_user(user_id)
    return jsonify({"success": True, "data": [review_json(r) for r in rows]})
