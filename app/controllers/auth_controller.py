from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from app.schemas import LoginIn, RegisterIn
from app.services.auth_service import AuthService
from app.utils.decorators import current_user_id
from app.utils.serializers import user_json

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register")
def register():
    data = RegisterIn.model_validate(request.get_json(silent=True) or {})
    user = AuthService.register(
        name=data.name,
        email=data.email,
        password=data.password,
        phone=data.phone,
        university=data.university,
        campus=data.campus,
        student_id=data.student_id,
    )
    return jsonify({
        "success": True,
        "message": "User registered successfully",
        "access_token": AuthService.issue_token(user),
        "user": user_json(user),
    }), 201


@auth_bp.post("/login")
def login():
    data = LoginIn.model_validate(request.get_json(silent=True) or {})
    token, user = AuthService.login(data.email, data.password)
    return jsonify({
        "success": True,
        "message": "Login successful",
        "access_token": token,
        "user": user_json(user),
    })


@auth_bp.get("/me")
@jwt_required()
def me():
    user = AuthService.get_user(current_user_id())
    return jsonify({"success": True, "user": user_json(user)})
