from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from app.schemas import ReportCreateIn, ReportResolveIn
from app.services.report_service import ReportService
from app.utils.decorators import current_user_id, role_required
from app.utils.serializers import report_json

report_bp = Blueprint("reports", __name__)


@report_bp.post("")
@jwt_required()
def create_report():
    data = ReportCreateIn.model_validate(request.get_json(silent=True) or {})
    r = ReportService.create(
        reporter_id=current_user_id(),
        reason=data.reason,
        description=data.description,
        reported_item_id=data.reported_item,
        reported_user_id=data.reported_user,
    )
    return jsonify({"success": True, "message": "Report submitted successfully", "data": report_json(r)}), 201


@report_bp.get("/my-reports")
@jwt_required()
def my_reports():
    rows = ReportService.list_mine(current_user_id())
    return jsonify({"success": True, "data": [report_json(r) for r in rows]})


@report_bp.get("")
@jwt_required()
@role_required("admin")
def all_reports():
    rows = ReportService.list_all(request.args.get("status") or None)
    return jsonify({"success": True, "data": [report_json(r) for r in rows]})


@report_bp.put("/<int:report_id>/resolve")
@jwt_required()
@role_required("admin")
def resolve_report(report_id: int):
    data = ReportResolveIn.model_validate(request.get_json(silent=True) or {})
    r = ReportService.resolve(current_user_id(), report_id, data.status, data.admin_notes)
    return jsonify({"success": True, "message": "Report resolved successfully", "data": report_json(r)})


@report_bp.delete("/<int:report_id>")
@jwt_required()
@role_required("admin")
def delete_report(report_id: int):
    ReportService.delete(report_id)
    return jsonify({"success": True, "message": "Report deleted successfully"})
