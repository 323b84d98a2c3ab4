from datetime import datetime

from app.models.enums import ReportStatus
from app.models.report import Report
from app.repositories.item_repo import ItemRepo
from app.repositories.report_repo import ReportRepo
from app.repositories.user_repo import UserRepo
from app.utils.errors import InvalidArgument, NotFound


class ReportService:
    @staticmethod
    def create(reporter_id: int, reason: str, description: str,
               reported_item_id: int | None = None, reported_user_id: int | None = None) -> Report:
        if not reported_item_id and not reported_user_id:
            raise InvalidArgument("Either reportedItem or reportedUser must be provided")
        if reported_item_id and not ItemRepo.get(reported_item_id):
            raise NotFound("Item not found")
        if reported_user_id and not UserRepo.get_by_id(reported_user_id):
            raise NotFound("User not found")

        return ReportRepo.create(Report(
            reporter_id=reporter_id,
            reported_item_id=reported_item_id,
            reported_user_id=reported_user_id,
            reason=reason,
            description=description,
        ))

    @staticmethod
    def list_mine(user_id: int):
        return ReportRepo.list_by_reporter(user_id)

    @staticmethod
    def list_all(status: str | None = None):
        return ReportRepo.list_all(status)

    @staticmethod
    def _get(report_id: int) -> Report:
        report = ReportRepo.get(report_id)
        if not report:
            raise NotFound("Report not found")
        return report

    @staticmethod
    def resolve(admin_id: int, report_id: int, status: str, admin_notes: str | None = None) -> Report:
        if status not in (ReportStatus.RESOLVED.value, ReportStatus.DISMISSED.value):
            raise InvalidArgument("Status must be either Resolved or Dismissed")

        report = ReportService._get(report_id)
        report.status = status
        report.admin_notes = admin_notes or report.admin_notes
        report.resolved_by_id = admin_id
        report.resolved_at = datetime.utcnow()
        ReportRepo.commit()
        return report

    @staticmethod
    def delete(report_id: int):
        ReportRepo.delete(ReportService._get(report_id))
