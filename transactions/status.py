from datetime import datetime, date

from common.decimal_utils import ZERO, parse_decimal


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return None
    return None


def resolve_display_status(status, due_date=None, balance_due=None, today=None):
    """
    Status to show for a transaction, derived at read time.

    A zero balance reads as "paid" and a positive balance past its due date
    reads as "overdue", whatever is stored. Nothing is written back.
    """
    balance = parse_decimal(balance_due)
    if balance is None:
        return status
    if balance == ZERO:
        return "paid"

    due = _as_date(due_date)
    today = _as_date(today) if today is not None else datetime.utcnow().date()
    if balance > ZERO and due is not None and due < today:
        return "overdue"
    return status
