from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from app.schemas import AdminMessageIn, VerificationStatusIn, VerificationSubmitIn
from app.services.verification_service import VerificationService
from app.utils.decorators import current_user_id, role_required
from app.utils.serializers import verification_json

verification_bp = Blueprint("verification", __name__)


@verification_bp.post("")
@jwt_required()
def submit():
    data = VerificationSubmitIn.model_validate(request.get_json(silent=True) or {})
    v = VerificationService.submit(current_user_id(), data.message)
    return jsonify({"success": True, "message": "Verification request submitted", "data": verification_json(v)}), 201


@verification_bp.get("/me")
@jwt_required()
def my_request():
    v = VerificationService.get_for_user(current_user_id())
    return jsonify({"success": True, "data": verification_json(v) if v else None})


@verification_bp.get("")
@jwt_required()
@role_required("admin")
def list_requests():
    rows = VerificationService.list_requests(request.args.get("status") or None)
    return jsonify({"success": True, "data": [verification_json(v) for v in rows]})


@verification_bp.put("/<int:request_id>/status")
@jwt_required()
@role_required("admin")
def review(request_id: int):
    data = VerificationStatusIn.model_validate(request.get_json(silent=True) or {})
    v = VerificationService.review(current_user_id(), request_id, data.status, data.admin_note)
    return jsonify({"success": True, "data": verification_json(v)})


@verification_bp.post("/<int:request_id>/message")
@jwt_required()
@role_required("admin")
def post_message(request_id: int):
    data = AdminMessageIn.model_validate(request.get_json(silent=True) or {})
    v = VerificationService.post_admin_message(current_user_id(), request_id, data.content)
    return jsonify({"success": True, "data": verification_json(v)}), 201
