from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from app.schemas import ProfileUpdateIn
from app.services.auth_service import AuthService
from app.services.review_service import ReviewService
from app.utils.decorators import current_user_id
from app.utils.serializers import review_json, user_json

user_bp = Blueprint("users", __name__)


@user_bp.put("/profile")
@jwt_required()
def update_profile():
    data = ProfileUpdateIn.model_validate(request.get_json(silent=True) or {})
    user = AuthService.update_profile(current_user_id(), data.model_dump())
    return jsonify({"success": True, "message": "Profile updated successfully", "user": user_json(user)})


@user_bp.get("/<int:user_id>")
def get_profile(user_id: int):
    user = AuthService.get_user(user_id)
    return jsonify({"success": True, "user": user_json(user)})


@user_bp.get("/<int:user_id>/reviews")
def user_reviews(user_id: int):
    rows = ReviewService.list_for_user(user_id)
    return jsonify({"success": True, "data": [review_json(r) for r in rows]})
