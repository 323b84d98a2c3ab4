from app.models.report import Report
from app.extensions import db


class ReportRepo:
    @staticmethod
    def get(report_id: int):
        return db.session.get(Report, report_id)

    @staticmethod
    def list_by_reporter(user_id: int):
        return Report.query.filter_by(reporter_id=user_id).order_by(Report.id.desc()).all()

    @staticmethod
    def list_all(status: str | None = None):
        q = Report.query
        if status:
            q = q.filter_by(status=status)
        return q.order_by(Report.id.desc()).all()

    @staticmethod
    def create(report: Report):
        db.session.add(report)
        db.session.commit()
        return report

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def delete(report: Report):
        db.session.delete(report)
        db.session.commit()
