from flask import Blueprint, request, jsonify
from common.exceptions import ValidationError
from common.serializers import serialize_for_json
from common.validation import json_object, raise_if_errors, require
from storage import get_store

bp = Blueprint("users", __name__)

USER_FIELDS = ("username", "company_name", "gstin", "email", "phone", "role", "state")


@bp.route("/", methods=["POST"])
def create_user():
    data = json_object(request.get_json(silent=True))
    try:
        errors = {}
        require(data, ("username",), errors)
        raise_if_errors(errors, "user")
        store = get_store()
        if store.get_user_by_username(data["username"]):
            return jsonify({"error": "username already exists"}), 400
        user = store.create_user({f: data[f] for f in USER_FIELDS if f in data})
        return jsonify(serialize_for_json(user)), 201
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400


@bp.route("/<int:user_id>", methods=["GET"])
def get_user(user_id):
    user = get_store().get_user(user_id)
    if not user:
        return jsonify({"error": "User not found"}), 404
    return jsonify(serialize_for_json(user)), 200
