from datetime import datetime
from app.extensions import db


class Review(db.Model):
    __tablename__ = "reviews"
    __table_args__ = (
        db.UniqueConstraint("lending_request_id", "reviewer_id", "reviewee_id", name="uq_review_party"),
    )

    id = db.Column(db.Integer, primary_key=True)

    lending_request_id = db.Column(db.Integer, db.ForeignKey("lending_requests.id"), nullable=False, index=True)
    reviewer_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    reviewee_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey("items.id"), nullable=False)

    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(20), nullable=False)  # Lender/Borrower

    # communication/condition/punctuality sub-scores
    categories = db.Column(db.JSON, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    lending_request = db.relationship("LendingRequest")
    reviewer = db.relationship("User", foreign_keys=[reviewer_id])
    reviewee = db.relationship("User", foreign_keys=[reviewee_id])
    item = db.relationship("Item")
