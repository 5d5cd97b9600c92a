from flask import Blueprint, jsonify
from common.serializers import serialize_for_json
from reports.report_service import ReportService
from storage import get_store
from user.current_user import owner_required, get_current_user_id

bp = Blueprint("reports", __name__)


@bp.route("/ageing/receivables", methods=["GET"])
@owner_required
def receivables_ageing():
    report = ReportService(get_store()).receivables_ageing(get_current_user_id())
    return jsonify(serialize_for_json(report)), 200


@bp.route("/ageing/payables", methods=["GET"])
@owner_required
def payables_ageing():
    report = ReportService(get_store()).payables_ageing(get_current_user_id())
    return jsonify(serialize_for_json(report)), 200


@bp.route("/dashboard", methods=["GET"])
@owner_required
def dashboard():
    report = ReportService(get_store()).dashboard(get_current_user_id())
    return jsonify(serialize_for_json(report)), 200
