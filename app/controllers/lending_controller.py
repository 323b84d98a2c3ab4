# app/controllers/lending_controller.py

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from app.schemas import ChatMessageIn, LendingCreateIn, ReasonIn
from app.services.lending_service import LendingService
from app.utils.decorators import current_user_id, verified_required
from app.utils.serializers import chat_message_json, lending_json

lending_bp = Blueprint("lending", __name__)


def _body():
    return request.get_json(silent=True) or {}


@lending_bp.post("/request")
@jwt_required()
@verified_required
def create_request():
    data = LendingCreateIn.model_validate(_body())
    r = LendingService.create(
        item_id=data.item_id,
        borrower_id=current_user_id(),
        start_date=data.start_date,
        end_date=data.end_date,
        message=data.message,
        pickup_location=data.pickup_location,
        return_location=data.return_location,
    )
    return jsonify({
        "success": True,
        "message": "Lending request created successfully",
        "data": lending_json(r),
    }), 201


@lending_bp.get("/my-requests")
@jwt_required()
@verified_required
def my_requests():
    role = request.args.get("type", "all")
    status = request.args.get("status") or None
    rows = LendingService.list_for_user(current_user_id(), role, status)
    return jsonify({"success": True, "data": [lending_json(r) for r in rows]})


@lending_bp.get("/<int:request_id>")
@jwt_required()
@verified_required
def get_request(request_id: int):
    r = LendingService.get_for_party(request_id, current_user_id())
    return jsonify({"success": True, "data": lending_json(r)})


@lending_bp.post("/<int:request_id>/accept")
@jwt_required()
@verified_required
def accept_request(request_id: int):
    r = LendingService.accept(request_id, current_user_id())
    return jsonify({"success": True, "message": "Request accepted successfully", "data": lending_json(r)})


@lending_bp.post("/<int:request_id>/reject")
@jwt_required()
@verified_required
def reject_request(request_id: int):
    data = ReasonIn.model_validate(_body())
    r = LendingService.reject(request_id, current_user_id(), data.reason)
    return jsonify({"success": True, "message": "Request rejected", "data": lending_json(r)})


@lending_bp.post("/<int:request_id>/cancel")
@jwt_required()
@verified_required
def cancel_request(request_id: int):
    data = ReasonIn.model_validate(_body())
    r = LendingService.cancel(request_id, current_user_id(), data.reason)
    return jsonify({"success": True, "message": "Request cancelled", "data": lending_json(r)})


@lending_bp.post("/<int:request_id>/complete")
@jwt_required()
@verified_required
def complete_request(request_id: int):
    r = LendingService.complete(request_id, current_user_id())
    return jsonify({"success": True, "message": "Lending completed successfully", "data": lending_json(r)})


@lending_bp.get("/<int:request_id>/messages")
@jwt_required()
@verified_required
def list_messages(request_id: int):
    user_id = current_user_id()
    rows = LendingService.list_messages(request_id, user_id)
    return jsonify({"success": True, "data": [chat_message_json(m, user_id) for m in rows]})


@lending_bp.post("/<int:request_id>/messages")
@jwt_required()
@verified_required
def send_message(request_id: int):
    data = ChatMessageIn.model_validate(_body())
    user_id = current_user_id()
    m = LendingService.send_message(request_id, user_id, data.content)
    return jsonify({"success": True, "message": "Message sent", "data": chat_message_json(m, user_id)}), 201
