from datetime import datetime
from app.extensions import db


class LendingRequest(db.Model):
    __tablename__ = "lending_requests"

    id = db.Column(db.Integer, primary_key=True)

    item_id = db.Column(db.Integer, db.ForeignKey("items.id"), nullable=False, index=True)
    borrower_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    lender_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)

    # Pending/Accepted/Rejected/Active/Completed/Cancelled/Disputed
    status = db.Column(db.String(20), nullable=False, default="Pending", index=True)

    # snapshots taken at creation
    total_cost = db.Column(db.Numeric(10, 2), nullable=False)
    security_deposit = db.Column(db.Numeric(10, 2), nullable=False)

    message = db.Column(db.Text, nullable=True)
    pickup_location = db.Column(db.String(300), nullable=True)
    return_location = db.Column(db.String(300), nullable=True)

    actual_return_date = db.Column(db.DateTime, nullable=True)
    late_return_days = db.Column(db.Integer, nullable=False, default=0)
    late_fee = db.Column(db.Numeric(10, 2), nullable=False, default=0)

    cancellation_reason = db.Column(db.String(500), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    item = db.relationship("Item", backref="lending_requests")
    borrower = db.relationship("User", foreign_keys=[borrower_id])
    lender = db.relationship("User", foreign_keys=[lender_id])
