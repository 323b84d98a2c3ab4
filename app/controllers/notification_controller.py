from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from app.services.notification_service import NotificationService
from app.tasks.rental_check import check_rentals
from app.utils.decorators import current_user_id, role_required
from app.utils.serializers import notification_json

notif_bp = Blueprint("notifications", __name__)


@notif_bp.get("")
@jwt_required()
def my_notifications():
    unread = request.args.get("unread") == "true"
    rows = NotificationService.list_for_user(current_user_id(), unread)
    return jsonify({"success": True, "data": [notification_json(n) for n in rows]})


@notif_bp.put("/<int:notification_id>/read")
@jwt_required()
def mark_read(notification_id: int):
    n = NotificationService.mark_read(notification_id, current_user_id())
    return jsonify({"success": True, "data": notification_json(n)})


@notif_bp.put("/read-all")
@jwt_required()
def mark_all_read():
    count = NotificationService.mark_all_read(current_user_id())
    return jsonify({"success": True, "updated": count})


@notif_bp.post("/run-rental-check")
@jwt_required()
@role_required("admin")
def run_rental_check():
    summary = check_rentals()
    return jsonify({"success": True, "message": "Rental check executed", "data": summary})
