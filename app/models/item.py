from datetime import datetime
from app.extensions import db


class Item(db.Model):
    __tablename__ = "items"

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    title = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(50), nullable=False, index=True)
    condition = db.Column(db.String(20), nullable=False, default="Good")
    images = db.Column(db.JSON, nullable=False, default=list)
    tags = db.Column(db.JSON, nullable=False, default=list)

    daily_rate = db.Column(db.Numeric(10, 2), nullable=False)
    security_deposit = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    # Available/Rented/Maintenance/Unavailable
    availability = db.Column(db.String(20), nullable=False, default="Available", index=True)

    address = db.Column(db.String(300), nullable=True)
    campus = db.Column(db.String(200), nullable=True, index=True)

    min_lending_period = db.Column(db.Integer, nullable=False, default=1)
    max_lending_period = db.Column(db.Integer, nullable=False, default=30)

    view_count = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    owner = db.relationship("User", backref="items")
