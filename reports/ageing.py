"""
Receivables / payables ageing.

Open balances are bucketed by how many whole days have passed since the
due date:

    diff_days <= 0      current
    1  <= diff <= 30    days_1_to_30
    31 <= diff <= 60    days_31_to_60
    diff > 60           days_60_plus

``diff_days`` is floor((now - due_date) / 1 day), so a due date later today
or in the future is "current". Transactions without a due date are left
out of every bucket but still count towards the open balance summary.
"""
from datetime import datetime, date

from common.decimal_utils import ZERO, lenient_decimal
from transactions.transaction import OPEN_STATUSES

AGEING_BUCKETS = ("current", "days_1_to_30", "days_31_to_60", "days_60_plus")

RECEIVABLE_TYPE = "sales_invoice"
PAYABLE_TYPE = "purchase_bill"


def _as_datetime(value):
    if isinstance(value, datetime):
        return value.replace(tzinfo=None) if value.tzinfo else value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            return _as_datetime(datetime.fromisoformat(value.strip()))
        except ValueError:
            return None
    return None


def open_transactions(transactions, transaction_type):
    """Transactions of ``transaction_type`` still awaiting payment."""
    return [
        t for t in transactions
        if t.get("transaction_type") == transaction_type and t.get("status") in OPEN_STATUSES
    ]


def days_past_due(due_date, now):
    # timedelta.days is already floored, e.g. -12h -> -1
    return (now - due_date).days


def bucket_for(diff_days):
    if diff_days <= 0:
        return "current"
    if diff_days <= 30:
        return "days_1_to_30"
    if diff_days <= 60:
        return "days_31_to_60"
    return "days_60_plus"


def ageing_buckets(transactions, now=None):
    """
    Sum ``balance_due`` per ageing bucket.

    ``transactions`` must already be restricted to the open set (see
    ``open_transactions``). The result depends only on the records passed
    and ``now``.
    """
    now = _as_datetime(now) if now is not None else datetime.utcnow()
    result = {bucket: ZERO for bucket in AGEING_BUCKETS}

    for txn in transactions:
        due_date = _as_datetime(txn.get("due_date"))
        if due_date is None:
            continue
        bucket = bucket_for(days_past_due(due_date, now))
        result[bucket] += lenient_decimal(txn.get("balance_due"))

    return result


def open_balance_summary(transactions):
    total = sum((lenient_decimal(t.get("balance_due")) for t in transactions), ZERO)
    return {"total": total, "count": len(transactions)}
