# app/controllers/item_controller.py

from decimal import Decimal, InvalidOperation as DecimalError

from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required, verify_jwt_in_request

from app.schemas import ItemCreateIn, ItemUpdateIn
from app.services.item_service import ItemService
from app.utils.decorators import current_user_id
from app.utils.errors import InvalidArgument
from app.utils.serializers import item_json

item_bp = Blueprint("items", __name__)


def _decimal_arg(name):
    raw = request.args.get(name)
    if raw in (None, ""):
        return None
    try:
        return Decimal(raw)
    except DecimalError:
        raise InvalidArgument(f"{name} must be a number")


def _int_arg(name, default, lo, hi):
    try:
        return min(hi, max(lo, int(request.args.get(name, default))))
    except ValueError:
        raise InvalidArgument(f"{name} must be an integer")


@item_bp.get("")
def list_items():
    owner = request.args.get("owner")
    owner_id = None
    if owner == "me":
        verify_jwt_in_request()
        owner_id = current_user_id()
    elif owner:
        try:
            owner_id = int(owner)
        except ValueError:
            raise InvalidArgument("owner must be a user id or 'me'")

    filters = {
        "owner_id": owner_id,
        "category": request.args.get("category"),
        "availability": request.args.get("availability"),
        "campus": request.args.get("campus"),
        "min_price": _decimal_arg("minPrice"),
        "max_price": _decimal_arg("maxPrice"),
        "search": (request.args.get("search") or "").strip(),
        "sort_by": request.args.get("sortBy", "createdAt"),
        "sort_order": request.args.get("sortOrder", "desc"),
    }
    page = _int_arg("page", 1, 1, 10_000)
    limit = _int_arg("limit", 20, 1, 100)

    items, total = ItemService.search(filters, page, limit)
    return jsonify({
        "success": True,
        "data": [item_json(i) for i in items],
        "totalPages": (total + limit - 1) // limit,
        "currentPage": page,
        "totalItems": total,
    })


@item_bp.get("/<int:item_id>")
def get_item(item_id: int):
    i = ItemService.get_item(item_id, count_view=True)
    return jsonify({"success": True, "data": item_json(i)})


@item_bp.get("/user/<int:user_id>")
def user_items(user_id: int):
    rows = ItemService.list_by_owner(user_id)
    return jsonify({"success": True, "data": [item_json(i) for i in rows]})


@item_bp.post("")
@jwt_required()
def create_item():
    data = ItemCreateIn.model_validate(request.get_json(silent=True) or {})
    i = ItemService.create_item(current_user_id(), data.to_fields())
    return jsonify({"success": True, "message": "Item created successfully", "data": item_json(i)}), 201


@item_bp.put("/<int:item_id>")
@jwt_required()
def update_item(item_id: int):
    data = ItemUpdateIn.model_validate(request.get_json(silent=True) or {})
    i = ItemService.update_item(item_id, current_user_id(), data.to_fields())
    return jsonify({"success": True, "message": "Item updated successfully", "data": item_json(i)})


@item_bp.delete("/<int:item_id>")
@jwt_required()
def delete_item(item_id: int):
    ItemService.delete_item(item_id, current_user_id())
    return jsonify({"success": True, "message": "Item deleted successfully"})
