from datetime import datetime
from app.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False, default="")
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    phone = db.Column(db.String(50), nullable=True)
    university = db.Column(db.String(200), nullable=True)
    campus = db.Column(db.String(200), nullable=True)
    student_id = db.Column(db.String(50), nullable=True)
    profile_image = db.Column(db.String(500), nullable=True)

    rating = db.Column(db.Float, nullable=False, default=0)
    review_count = db.Column(db.Integer, nullable=False, default=0)
    trust_score = db.Column(db.Integer, nullable=False, default=100)

    is_verified = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    last_active = db.Column(db.DateTime, nullable=True)

    role = db.Column(db.String(20), nullable=False, default="user", index=True)  # user/admin

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
