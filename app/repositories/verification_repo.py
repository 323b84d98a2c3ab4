from app.models.verification_request import VerificationRequest
from app.extensions import db


class VerificationRepo:
    @staticmethod
    def get(request_id: int):
        return db.session.get(VerificationRequest, request_id)

    @staticmethod
    def get_by_user(user_id: int):
        return VerificationRequest.query.filter_by(user_id=user_id).first()

    @staticmethod
    def list_all(status: str | None = None):
        q = VerificationRequest.query
        if status:
            q = q.filter_by(status=status)
        return q.order_by(VerificationRequest.id.desc()).all()

    @staticmethod
    def create(req: VerificationRequest):
        db.session.add(req)
        db.session.commit()
        return req

    @staticmethod
    def commit():
        db.session.commit()
