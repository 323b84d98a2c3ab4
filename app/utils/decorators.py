from functools import wraps
from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity
from flask import jsonify

from app.repositories.user_repo import UserRepo


def current_user_id() -> int:
    return int(get_jwt_identity())


def role_required(*roles):
    """Role and active flag are read from the stored account, not from the token claims."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            user = UserRepo.get_by_id(current_user_id())
            if not user or not user.is_active or user.role not in roles:
                return jsonify({"success": False, "message": "Forbidden: admin only"}), 403
            return fn(*args, **kwargs)
        return wrapper
    return decorator


def verified_required(fn):
    """Borrowing, lending and chat are limited to verified accounts."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        verify_jwt_in_request()
        user = UserRepo.get_by_id(current_user_id())
        if not user:
            return jsonify({"success": False, "message": "User not found"}), 404
        if not user.is_verified:
            return jsonify({
                "success": False,
                "message": "Account verification required to borrow, lend, or chat.",
            }), 403
        return fn(*args, **kwargs)
    return wrapper
