from flask import current_app

from app.extensions import db
from app.models.enums import Role, values
from app.repositories.item_repo import ItemRepo
from app.repositories.review_repo import ReviewRepo
from app.repositories.user_repo import UserRepo
from app.services.item_service import ItemService
from app.services.review_service import ReviewService
from app.utils.errors import InvalidArgument, InvalidOperation, NotFound


class AdminService:
    """
    Role management and moderation. The caller is assumed to be an admin;
    the HTTP layer enforces that with role_required("admin").
    """

    @staticmethod
    def list_users():
        return UserRepo.list_all()

    @staticmethod
    def _get_user(user_id: int):
        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    @staticmethod
    def change_role(acting_admin_id: int, target_user_id: int, new_role: str):
        if new_role not in values(Role):
            raise InvalidArgument("Invalid role")

        target = AdminService._get_user(target_user_id)

        if acting_admin_id == target.id and new_role == Role.USER.value:
            raise InvalidOperation("Admins cannot demote themselves")

        if new_role == target.role:
            return target

        try:
            if new_role == Role.USER.value:
                # count check and write happen in the same statement
                if not UserRepo.demote_admin_unless_last(target.id):
                    raise InvalidOperation("Cannot remove the last admin")
            else:
                target.role = new_role
            UserRepo.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(
            f"[admin] user={target.id} role -> {new_role} by admin={acting_admin_id}"
        )
        return target

    @staticmethod
    def verify_user(target_user_id: int):
        target = AdminService._get_user(target_user_id)
        target.is_verified = True
        UserRepo.commit()
        current_app.logger.info(f"[admin] user={target.id} marked verified")
        return target

    @staticmethod
    def deactivate_user(target_user_id: int):
        target = AdminService._get_user(target_user_id)
        try:
            if not UserRepo.deactivate_unless_last_admin(target.id):
                raise InvalidOperation("Cannot deactivate the last active admin")
            UserRepo.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"[admin] user={target.id} deactivated")
        return target

    @staticmethod
    def list_items(is_active=None, page: int = 1, limit: int = 20):
        return ItemRepo.list_admin(is_active, page, limit)

    @staticmethod
    def deactivate_item(item_id: int):
        item = ItemRepo.get(item_id)
        if not item:
            raise NotFound("Item not found")
        return ItemService.retire(item, "Item was removed by an admin")

    @staticmethod
    def delete_review(review_id: int):
        review = ReviewRepo.get(review_id)
        if not review:
            raise NotFound("Review not found")

        reviewee_id = review.reviewee_id
        try:
            ReviewRepo.delete(review)
            ReviewService.refresh_user_rating(reviewee_id)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
