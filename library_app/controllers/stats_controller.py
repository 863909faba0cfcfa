from flask import Blueprint, jsonify

from library_app.services.report_service import ReportService
from library_app.utils.decorators import admin_required

stats_bp = Blueprint("stats", __name__)


@stats_bp.get("/")
@admin_required
def dashboard_stats(identity):
    return jsonify({"success": True, "data": ReportService.get_stats(identity).to_dict()})
