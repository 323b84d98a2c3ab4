from flask import current_app

from app.extensions import db
from app.models.enums import Availability, LendingStatus, NotificationType
from app.models.item import Item
from app.repositories.lending_repo import LendingRepo
from app.repositories.item_repo import ItemRepo
from app.services.notification_service import NotificationService
from app.utils.errors import Forbidden, InvalidState, NotFound

UPDATABLE = [
    "title", "description", "category", "images", "condition", "daily_rate",
    "security_deposit", "availability", "address", "campus", "tags",
    "min_lending_period", "max_lending_period",
]


class ItemService:
    @staticmethod
    def search(filters: dict, page: int = 1, limit: int = 20):
        return ItemRepo.search(filters, page, limit)

    @staticmethod
    def get_item(item_id: int, count_view: bool = False) -> Item:
        item = ItemRepo.get(item_id)
        if not item:
            raise NotFound("Item not found")
        if count_view:
            item.view_count = (item.view_count or 0) + 1
            ItemRepo.update()
        return item

    @staticmethod
    def _owned(item_id: int, user_id: int, action: str) -> Item:
        item = ItemService.get_item(item_id)
        if item.owner_id != user_id:
            raise Forbidden(f"Not authorized to {action} this item")
        return item

    @staticmethod
    def create_item(owner_id: int, data: dict) -> Item:
        item = Item(owner_id=owner_id, **{k: v for k, v in data.items() if v is not None})
        return ItemRepo.create(item)

    @staticmethod
    def update_item(item_id: int, user_id: int, data: dict) -> Item:
        item = ItemService._owned(item_id, user_id, "update")

        if "availability" in data and data["availability"] != item.availability:
            # Rented is owned by the lending lifecycle
            if data["availability"] == Availability.RENTED.value or item.availability == Availability.RENTED.value:
                raise InvalidState("Availability of a rented item is managed by its lending request")

        for k in UPDATABLE:
            if k in data:
                setattr(item, k, data[k])

        ItemRepo.update()
        return item

    @staticmethod
    def retire(item: Item, reason: str) -> Item:
        """
        Soft-deletes the item and cancels its pending requests in the same commit.
        Borrowers of the cancelled requests are notified afterwards.
        """
        cancelled = []
        try:
            item.is_active = False
            for r in LendingRepo.pending_for_item(item.id):
                if LendingRepo.transition(r.id, [LendingStatus.PENDING.value], LendingStatus.CANCELLED.value,
                                          cancellation_reason=reason):
                    cancelled.append((r.id, r.borrower_id))
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        current_app.logger.info(f"[items] item={item.id} deactivated, cancelled_requests={len(cancelled)}")

        for request_id, borrower_id in cancelled:
            NotificationService.emit(
                borrower_id,
                NotificationType.SYSTEM,
                "Request Cancelled",
                f"{item.title} is no longer listed, so your request was cancelled",
                related_id=request_id,
                link=f"/lending/{request_id}",
            )
        return item

    @staticmethod
    def delete_item(item_id: int, user_id: int):
        item = ItemService._owned(item_id, user_id, "delete")

        if LendingRepo.holding_item(item.id):
            raise InvalidState("Item has an ongoing rental")

        ItemService.retire(item, "Item was removed by its owner")

    @staticmethod
    def list_by_owner(owner_id: int):
        return ItemRepo.list_by_owner(owner_id)
