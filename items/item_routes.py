from flask import Blueprint, request, jsonify
from common.exceptions import NotFoundError, ValidationError
from common.serializers import serialize_for_json
from common.validation import json_object
from items.item_service import ItemService
from storage import get_store
from user.current_user import owner_required, get_current_user_id

bp = Blueprint("items", __name__)


def _service():
    return ItemService(get_store())


@bp.route("/", methods=["POST"])
@owner_required
def create_item():
    data = json_object(request.get_json(silent=True))
    try:
        item = _service().create_item(get_current_user_id(), data)
        return jsonify(serialize_for_json(item)), 201
    except ValidationError as e:
        return jsonify({"error": str(e), "fields": e.errors}), 400


@bp.route("/", methods=["GET"])
@owner_required
def list_items():
    return jsonify(serialize_for_json(_service().list_items(get_current_user_id()))), 200


@bp.route("/listed", methods=["GET"])
@owner_required
def list_listed_items():
    items = _service().list_items(get_current_user_id(), listed_only=True)
    return jsonify(serialize_for_json(items)), 200


@bp.route("/featured", methods=["GET"])
def list_featured_items():
    try:
        limit = int(request.args.get("limit", 10))
    except ValueError:
        return jsonify({"error": "limit must be an integer"}), 400
    return jsonify(serialize_for_json(_service().featured_items(limit))), 200


@bp.route("/<int:item_id>", methods=["GET"])
@owner_required
def get_item(item_id):
    try:
        return jsonify(serialize_for_json(_service().get_item(item_id, get_current_user_id()))), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404


@bp.route("/<int:item_id>", methods=["PUT"])
@owner_required
def update_item(item_id):
    data = json_object(request.get_json(silent=True))
    try:
        item = _service().update_item(item_id, data, get_current_user_id())
        return jsonify(serialize_for_json(item)), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
    except ValidationError as e:
        return jsonify({"error": str(e), "fields": e.errors}), 400


@bp.route("/<int:item_id>/listing", methods=["PUT"])
@owner_required
def update_item_listing(item_id):
    data = json_object(request.get_json(silent=True))
    try:
        item = _service().update_listing(item_id, data, get_current_user_id())
        return jsonify(serialize_for_json(item)), 200
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404
