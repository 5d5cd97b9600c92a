from flask import Blueprint, request, jsonify
from common.exceptions import NotFoundError, ValidationError
from common.serializers import serialize_for_json
from common.validation import json_object
from bnpl.bnpl_service import BnplService
from storage import get_store
from user.current_user import owner_required, get_current_user_id

bp = Blueprint("bnpl_limits", __name__)


def _service():
    return BnplService(get_store())


@bp.route("/", methods=["POST"])
@owner_required
def create_limit():
    data = json_object(request.get_json(silent=True))
    try:
        bnpl_limit = _service().create_limit(get_current_user_id(), data)
        return jsonify(serialize_for_json(bnpl_limit)), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400


@bp.route("/", methods=["GET"])
@owner_required
def list_limits():
    party_id = request.args.get("party_id")
    try:
        party_id = int(party_id) if party_id else None
    except ValueError:
        return jsonify({"error": "Invalid party ID"}), 400
    limits = _service().list_limits(get_current_user_id(), party_id=party_id, limit_type=request.args.get("type"))
    return jsonify(serialize_for_json(limits)), 200


@bp.route("/<int:limit_id>", methods=["PUT"])
@owner_required
def update_limit(limit_id):
    data = json_object(request.get_json(silent=True))
    try:
        bnpl_limit = _service().update_limit(limit_id, data, get_current_user_id())
        return jsonify(serialize_for_json(bnpl_limit)), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400


@bp.route("/<int:limit_id>/utilize", methods=["POST"])
@owner_required
def utilize_limit(limit_id):
    data = json_object(request.get_json(silent=True))
    try:
        bnpl_limit = _service().utilize(limit_id, data.get("amount"), get_current_user_id())
        return jsonify(serialize_for_json(bnpl_limit)), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400


@bp.route("/<int:limit_id>/release", methods=["POST"])
@owner_required
def release_limit(limit_id):
    data = json_object(request.get_json(silent=True))
    try:
        bnpl_limit = _service().release(limit_id, data.get("amount"), get_current_user_id())
        return jsonify(serialize_for_json(bnpl_limit)), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
