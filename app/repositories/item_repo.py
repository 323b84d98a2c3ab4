from sqlalchemy import or_, update, cast, String

from app.models.item import Item
from app.extensions import db

SORTABLE = {
    "createdAt": Item.created_at,
    "dailyRate": Item.daily_rate,
    "title": Item.title,
    "viewCount": Item.view_count,
}


class ItemRepo:
    @staticmethod
    def get(item_id: int):
        return db.session.get(Item, item_id)

    @staticmethod
    def search(filters: dict, page: int = 1, limit: int = 20):
        q = Item.query.filter(Item.is_active.is_(True))

        if filters.get("owner_id"):
            q = q.filter(Item.owner_id == filters["owner_id"])
        if filters.get("category"):
            q = q.filter(Item.category == filters["category"])
        if filters.get("availability"):
            q = q.filter(Item.availability == filters["availability"])
        if filters.get("campus"):
            q = q.filter(Item.campus == filters["campus"])
        if filters.get("min_price") is not None:
            q = q.filter(Item.daily_rate >= filters["min_price"])
        if filters.get("max_price") is not None:
            q = q.filter(Item.daily_rate <= filters["max_price"])
        if filters.get("search"):
            pattern = f"%{filters['search']}%"
            q = q.filter(or_(
                Item.title.ilike(pattern),
                Item.description.ilike(pattern),
                cast(Item.tags, String).ilike(pattern),
            ))

        total = q.count()

        col = SORTABLE.get(filters.get("sort_by") or "createdAt", Item.created_at)
        order = col.asc() if filters.get("sort_order") == "asc" else col.desc()
        rows = q.order_by(order, Item.id.desc()).limit(limit).offset((page - 1) * limit).all()
        return rows, total

    @staticmethod
    def list_by_owner(owner_id: int):
        return (
            Item.query
            .filter(Item.owner_id == owner_id, Item.is_active.is_(True))
            .order_by(Item.id.desc())
            .all()
        )

    @staticmethod
    def list_admin(is_active=None, page: int = 1, limit: int = 20):
        q = Item.query
        if is_active is not None:
            q = q.filter(Item.is_active.is_(is_active))
        total = q.count()
        rows = q.order_by(Item.id.desc()).limit(limit).offset((page - 1) * limit).all()
        return rows, total

    @staticmethod
    def create(item: Item):
        db.session.add(item)
        db.session.commit()
        return item

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def set_availability_if(item_id: int, expected: str, new: str, active_only: bool = False) -> bool:
        """Compare-and-set on availability; no commit."""
        conditions = [Item.id == item_id, Item.availability == expected]
        if active_only:
            conditions.append(Item.is_active.is_(True))
        result = db.session.execute(
            update(Item)
            .where(*conditions)
            .values(availability=new)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
