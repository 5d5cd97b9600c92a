"""
Input checks for transaction headers and line items.

``clean_transaction`` / ``clean_transaction_item`` return a new dict with
only known fields, typed for the store. They raise ValidationError with
every failing field at once. Money fields are never rejected: anything
unparseable becomes 0.
"""
from common.decimal_utils import lenient_decimal, money, parse_decimal
from common.validation import (
    check_choice, parse_bool, parse_datetime, parse_int, raise_if_errors, require,
)
from transactions.transaction import TRANSACTION_STATUSES, TRANSACTION_TYPES

HEADER_REQUIRED = ("transaction_number", "transaction_type", "transaction_date", "party_id")
ITEM_REQUIRED = ("item_id", "quantity", "rate")

HEADER_FIELDS = HEADER_REQUIRED + (
    "amount", "balance_due", "due_date", "status", "is_bnpl", "is_sync", "reference", "notes",
)
ITEM_FIELDS = ITEM_REQUIRED + ("description", "amount", "tax_rate", "tax_amount", "total_amount")


def clean_transaction(data, partial=False):
    if not isinstance(data, dict):
        raise_if_errors({"transaction": "must be an object"}, "transaction")

    errors = {}
    if not partial:
        require(data, HEADER_REQUIRED, errors)

    cleaned = {}
    for field in HEADER_FIELDS:
        if field not in data or field in errors:
            continue
        value = data[field]

        if field == "transaction_type":
            cleaned[field] = check_choice(value, field, TRANSACTION_TYPES, errors)
        elif field == "status":
            cleaned[field] = check_choice(value, field, TRANSACTION_STATUSES, errors)
        elif field == "party_id":
            cleaned[field] = parse_int(value, field, errors)
        elif field == "transaction_date":
            cleaned[field] = parse_datetime(value, field, errors)
        elif field == "due_date":
            cleaned[field] = parse_datetime(value, field, errors) if value not in (None, "") else None
        elif field in ("amount", "balance_due"):
            cleaned[field] = lenient_decimal(value)
        elif field in ("is_bnpl", "is_sync"):
            cleaned[field] = parse_bool(value)
        elif field == "transaction_number":
            cleaned[field] = str(value).strip()
        else:
            cleaned[field] = value

    raise_if_errors(errors, "transaction")

    if not partial:
        cleaned.setdefault("status", "pending")
        cleaned.setdefault("is_bnpl", False)
        cleaned.setdefault("is_sync", False)
    return cleaned


def clean_transaction_item(data, index=None):
    what = "item" if index is None else f"item {index}"
    if not isinstance(data, dict):
        raise_if_errors({"item": "must be an object"}, what)

    errors = {}
    require(data, ITEM_REQUIRED, errors)
    item_id = parse_int(data["item_id"], "item_id", errors) if "item_id" not in errors else None
    raise_if_errors(errors, what)

    # Line values are kept at the two places every backend stores them at
    quantity = money(data.get("quantity"))
    rate = money(data.get("rate"))
    tax_rate = money(data.get("tax_rate"))

    # Caller-supplied line values win; missing ones are derived
    amount = parse_decimal(data.get("amount"))
    amount = money(quantity * rate if amount is None else amount)
    tax_amount = parse_decimal(data.get("tax_amount"))
    tax_amount = money(amount * tax_rate / 100 if tax_amount is None else tax_amount)
    total_amount = parse_decimal(data.get("total_amount"))
    total_amount = money(amount + tax_amount if total_amount is None else total_amount)

    return {
        "item_id": item_id,
        "description": data.get("description"),
        "quantity": quantity,
        "rate": rate,
        "amount": amount,
        "tax_rate": tax_rate,
        "tax_amount": tax_amount,
        "total_amount": total_amount,
    }
