from flask import Blueprint, request, jsonify
from common.exceptions import NotFoundError, ValidationError
from common.serializers import serialize_for_json
from common.validation import json_object
from parties.party_service import PartyService
from storage import get_store
from transactions.transaction_service import with_display_status
from user.current_user import owner_required, get_current_user_id

bp = Blueprint("parties", __name__)


def _service():
    return PartyService(get_store())


# -------------------- CREATE PARTY --------------------
@bp.route("/", methods=["POST"])
@owner_required
def create_party():
    data = json_object(request.get_json(silent=True))
    try:
        party = _service().create_party(get_current_user_id(), data)
        return jsonify(serialize_for_json(party)), 201
    except ValidationError as e:
        return jsonify({"error": str(e), "fields": e.errors}), 400


# -------------------- LIST PARTIES --------------------
@bp.route("/", methods=["GET"])
@owner_required
def list_parties():
    parties = _service().list_parties(get_current_user_id(), request.args.get("type"))
    return jsonify(serialize_for_json(parties)), 200


# -------------------- GET PARTY --------------------
@bp.route("/<int:party_id>", methods=["GET"])
@owner_required
def get_party(party_id):
    try:
        party = _service().get_party(party_id, get_current_user_id())
        return jsonify(serialize_for_json(party)), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


# -------------------- UPDATE PARTY --------------------
@bp.route("/<int:party_id>", methods=["PUT"])
@owner_required
def update_party(party_id):
    data = json_object(request.get_json(silent=True))
    try:
        party = _service().update_party(party_id, data, get_current_user_id())
        return jsonify(serialize_for_json(party)), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e), "fields": e.errors}), 400


# -------------------- PARTY TRANSACTIONS --------------------
@bp.route("/<int:party_id>/transactions", methods=["GET"])
@owner_required
def get_party_transactions(party_id):
    try:
        transactions = _service().get_party_transactions(party_id, get_current_user_id())
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    return jsonify(serialize_for_json([with_display_status(t) for t in transactions])), 200
