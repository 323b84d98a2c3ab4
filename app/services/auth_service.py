from datetime import datetime

from werkzeug.security import generate_password_hash, check_password_hash
from flask_jwt_extended import create_access_token
from app.models.user import User
from app.repositories.user_repo import UserRepo
from app.utils.errors import InvalidArgument, NotFound, Unauthenticated


class AuthService:
    @staticmethod
    def register(name: str, email: str, password: str, **profile):
        email = email.strip().lower()
        if UserRepo.get_by_email(email):
            raise InvalidArgument("User already exists")

        user = User(
            name=name or "",
            email=email,
            password_hash=generate_password_hash(password),
            role="user",  # never taken from the request
            phone=profile.get("phone"),
            university=profile.get("university"),
            campus=profile.get("campus"),
            student_id=profile.get("student_id"),
        )
        UserRepo.create(user)
        return user

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "email": user.email}
        )

    @staticmethod
    def login(email: str, password: str):
        user = UserRepo.get_by_email(email.strip().lower())
        if not user or not check_password_hash(user.password_hash, password):
            raise Unauthenticated("Invalid credentials")
        if not user.is_active:
            raise Unauthenticated("Account is deactivated")

        user.last_active = datetime.utcnow()
        UserRepo.commit()

        return AuthService.issue_token(user), user

    @staticmethod
    def get_user(user_id: int) -> User:
        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    @staticmethod
    def update_profile(user_id: int, fields: dict) -> User:
        user = AuthService.get_user(user_id)
        for k in ["name", "phone", "campus", "student_id", "profile_image"]:
            if fields.get(k):
                setattr(user, k, fields[k])
        UserRepo.commit()
        return user
