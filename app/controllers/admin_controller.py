from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from app.schemas import RoleChangeIn
from app.services.admin_service import AdminService
from app.utils.decorators import current_user_id, role_required
from app.utils.errors import InvalidArgument
from app.utils.serializers import item_json, user_json

admin_bp = Blueprint("admin", __name__)


def _page_args():
    try:
        page = max(1, int(request.args.get("page", 1)))
        limit = min(100, max(1, int(request.args.get("limit", 20))))
    except ValueError:
        raise InvalidArgument("page and limit must be integers")
    return page, limit


@admin_bp.get("/users")
@jwt_required()
@role_required("admin")
def list_users():
    users = AdminService.list_users()
    return jsonify({"success": True, "data": [user_json(u) for u in users]})


@admin_bp.put("/users/<int:user_id>/role")
@jwt_required()
@role_required("admin")
def change_role(user_id: int):
    data = RoleChangeIn.model_validate(request.get_json(silent=True) or {})
    u = AdminService.change_role(current_user_id(), user_id, data.role)
    return jsonify({"success": True, "data": user_json(u)})


@admin_bp.put("/users/<int:user_id>/verify")
@jwt_required()
@role_required("admin")
def verify_user(user_id: int):
    u = AdminService.verify_user(user_id)
    return jsonify({"success": True, "data": user_json(u)})


@admin_bp.put("/users/<int:user_id>/deactivate")
@jwt_required()
@role_required("admin")
def deactivate_user(user_id: int):
    u = AdminService.deactivate_user(user_id)
    return jsonify({"success": True, "data": user_json(u)})


@admin_bp.get("/items")
@jwt_required()
@role_required("admin")
def list_items():
    page, limit = _page_args()
    raw = request.args.get("isActive")
    is_active = None if raw is None else raw == "true"
    rows, total = AdminService.list_items(is_active, page, limit)
    return jsonify({
        "success": True,
        "data": [item_json(i) for i in rows],
        "totalItems": total,
        "totalPages": (total + limit - 1) // limit,
    })


@admin_bp.put("/items/<int:item_id>/deactivate")
@jwt_required()
@role_required("admin")
def deactivate_item(item_id: int):
    i = AdminService.deactivate_item(item_id)
    return jsonify({"success": True, "data": {"id": i.id, "title": i.title, "isActive": bool(i.is_active)}})


@admin_bp.delete("/reviews/<int:review_id>")
@jwt_required()
@role_required("admin")
def delete_review(review_id: int):
    AdminService.delete_review(review_id)
    return jsonify({"success": True})
