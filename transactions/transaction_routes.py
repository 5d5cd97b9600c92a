import io
import logging
from datetime import datetime

import pandas as pd
from flask import Blueprint, request, jsonify, send_file, make_response

from common.decimal_utils import lenient_decimal
from common.exceptions import NotFoundError, PartialWriteError, ValidationError
from common.serializers import serialize_for_json
from common.validation import json_object
from storage import get_store
from transactions.transaction_service import TransactionService
from user.current_user import owner_required, get_current_user_id

logger = logging.getLogger(__name__)

bp = Blueprint("transactions", __name__)


def _service():
    return TransactionService(get_store())


def _filters():
    return {
        "transaction_type": request.args.get("type"),
        "status": request.args.get("status"),
        "start_date": request.args.get("start_date"),
        "end_date": request.args.get("end_date"),
    }


# -------------------- CREATE TRANSACTION --------------------
@bp.route("/", methods=["POST"])
@owner_required
def create_transaction():
    try:
        data = json_object(request.get_json(silent=True))
        result = _service().create_transaction(get_current_user_id(), data.get("transaction"), data.get("items"))
        return jsonify(serialize_for_json(result)), 201
    except ValidationError as e:
        logger.warning("Transaction rejected: %s", e)
        return jsonify({"message": "Failed to create transaction", "error": str(e), "fields": e.errors}), 400
    except PartialWriteError as e:
        return jsonify({
            "message": "Failed to create transaction",
            "error": str(e),
            "transaction_id": e.transaction_id,
            "items_written": len(e.written_items),
        }), 400
    except Exception as e:
        logger.exception("Transaction create failed")
        return jsonify({"message": "Failed to create transaction", "error": str(e)}), 400


# -------------------- LIST TRANSACTIONS --------------------
@bp.route("/", methods=["GET"])
@owner_required
def list_transactions():
    try:
        transactions = _service().list_transactions(get_current_user_id(), **_filters())
    except ValidationError as e:
        return jsonify({"message": "Failed to fetch transactions", "error": str(e)}), 400
    return jsonify(serialize_for_json(transactions)), 200


# -------------------- GET TRANSACTION --------------------
@bp.route("/<int:transaction_id>", methods=["GET"])
@owner_required
def get_transaction(transaction_id):
    try:
        result = _service().get_transaction(transaction_id, get_current_user_id())
    except NotFoundError:
        return jsonify({"message": "Transaction not found"}), 404
    return jsonify(serialize_for_json(result)), 200


@bp.route("/<int:transaction_id>/items", methods=["GET"])
@owner_required
def get_transaction_items(transaction_id):
    try:
        items = _service().get_transaction_items(transaction_id, get_current_user_id())
    except NotFoundError:
        return jsonify({"message": "Transaction not found"}), 404
    return jsonify(serialize_for_json(items)), 200


# -------------------- UPDATE TRANSACTION --------------------
@bp.route("/<int:transaction_id>", methods=["PUT"])
@owner_required
def update_transaction(transaction_id):
    data = json_object(request.get_json(silent=True))
    try:
        result = _service().update_transaction(transaction_id, data, get_current_user_id())
    except NotFoundError:
        return jsonify({"message": "Transaction not found"}), 404
    except ValidationError as e:
        return jsonify({"message": "Failed to update transaction", "error": str(e), "fields": e.errors}), 400
    return jsonify(serialize_for_json(result)), 200


# -------------------- DELETE TRANSACTION --------------------
@bp.route("/<int:transaction_id>", methods=["DELETE"])
@owner_required
def delete_transaction(transaction_id):
    try:
        _service().delete_transaction(transaction_id, get_current_user_id())
    except NotFoundError:
        return jsonify({"message": "Transaction not found"}), 404
    return jsonify({"message": "Transaction deleted", "id": transaction_id}), 200


# -------------------- RECORD PAYMENT --------------------
@bp.route("/<int:transaction_id>/payments", methods=["POST"])
@owner_required
def record_payment(transaction_id):
    data = json_object(request.get_json(silent=True))
    try:
        result = _service().record_payment(transaction_id, data.get("amount"), get_current_user_id())
    except NotFoundError:
        return jsonify({"message": "Transaction not found"}), 404
    except ValidationError as e:
        return jsonify({"message": "Failed to record payment", "error": str(e)}), 400
    return jsonify(serialize_for_json(result)), 200


# -------------------- EXPORT --------------------
EXPORT_COLUMNS = [
    "ID", "Transaction Number", "Type", "Transaction Date", "Party ID", "Amount",
    "Balance Due", "Due Date", "Status", "Display Status", "BNPL", "Reference",
]


def _export_frame():
    transactions = _service().list_transactions(get_current_user_id(), **_filters())
    data = []
    for t in transactions:
        data.append({
            "ID": t["id"],
            "Transaction Number": t["transaction_number"],
            "Type": t["transaction_type"],
            "Transaction Date": t["transaction_date"].strftime('%Y-%m-%d') if t.get("transaction_date") else '',
            "Party ID": t["party_id"],
            "Amount": float(lenient_decimal(t.get("amount"))),
            "Balance Due": float(lenient_decimal(t.get("balance_due"))),
            "Due Date": t["due_date"].strftime('%Y-%m-%d') if t.get("due_date") else '',
            "Status": t["status"],
            "Display Status": t["display_status"],
            "BNPL": "Yes" if t.get("is_bnpl") else "No",
            "Reference": t.get("reference") or '',
        })
    return pd.DataFrame(data, columns=EXPORT_COLUMNS)


@bp.route("/export/excel", methods=["GET"])
@owner_required
def export_transactions_excel():
    try:
        df = _export_frame()
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        df.to_excel(writer, index=False, sheet_name='Transactions')
    output.seek(0)

    filename = f"transactions_export_{datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    return send_file(
        output,
        mimetype='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        as_attachment=True,
        download_name=filename
    )


@bp.route("/export/csv", methods=["GET"])
@owner_required
def export_transactions_csv():
    try:
        df = _export_frame()
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    output = io.StringIO()
    df.to_csv(output, index=False)
    response = make_response(output.getvalue())
    response.headers['Content-Type'] = 'text/csv; charset=utf-8'
    response.headers['Content-Disposition'] = (
        f'attachment; filename=transactions_export_{datetime.now().strftime("%Y%m%d_%H%M%S")}.csv'
    )
    return response
