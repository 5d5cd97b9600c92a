from flask import Blueprint, request, jsonify
from common.exceptions import ValidationError
from common.serializers import serialize_for_json
from common.validation import check_choice, json_object, parse_int, raise_if_errors, require
from storage import get_store
from tally_sync.tally_sync_log import SYNC_STATUSES
from user.current_user import owner_required, get_current_user_id

bp = Blueprint("tally_sync", __name__)


def clean_sync_log(data):
    errors = {}
    require(data, ("sync_type", "status"), errors)
    raise_if_errors(errors, "sync log")
    status = check_choice(data["status"], "status", SYNC_STATUSES, errors)
    records_synced = parse_int(data.get("records_synced", 0), "records_synced", errors)
    raise_if_errors(errors, "sync log")
    return {
        "sync_type": data["sync_type"],
        "status": status,
        "records_synced": records_synced,
        "message": data.get("message"),
    }


# -------------------- RECORD SYNC RUN --------------------
@bp.route("/", methods=["POST"])
@owner_required
def create_sync_log():
    data = json_object(request.get_json(silent=True))
    try:
        log = clean_sync_log(data)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    log["user_id"] = get_current_user_id()
    return jsonify(serialize_for_json(get_store().create_tally_sync_log(log))), 201


# -------------------- LIST SYNC RUNS --------------------
@bp.route("/", methods=["GET"])
@owner_required
def list_sync_logs():
    return jsonify(serialize_for_json(get_store().get_tally_sync_logs(get_current_user_id()))), 200


@bp.route("/latest", methods=["GET"])
@owner_required
def latest_sync_log():
    log = get_store().get_recent_tally_sync_log(get_current_user_id())
    if not log:
        return jsonify({"error": "No sync has been recorded"}), 404
    return jsonify(serialize_for_json(log)), 200
