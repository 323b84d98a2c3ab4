from datetime import datetime
from app.extensions import db


class LendingMessage(db.Model):
    __tablename__ = "lending_messages"

    id = db.Column(db.Integer, primary_key=True)
    request_id = db.Column(db.Integer, db.ForeignKey("lending_requests.id"), nullable=False, index=True)
    sender_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    content = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    request = db.relationship("LendingRequest", backref="messages")
    sender = db.relationship("User")
