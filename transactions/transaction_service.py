import logging

from common.decimal_utils import ZERO, lenient_decimal, parse_decimal
from common.exceptions import NotFoundError, PartialWriteError, ValidationError
from common.validation import parse_datetime, raise_if_errors
from transactions.status import resolve_display_status
from transactions.totals import calculate_totals
from transactions.transaction_schema import clean_transaction, clean_transaction_item

logger = logging.getLogger(__name__)


def with_display_status(transaction):
    return {
        **transaction,
        "display_status": resolve_display_status(
            transaction.get("status"), transaction.get("due_date"), transaction.get("balance_due")
        ),
    }


class TransactionService:
    """Transaction lifecycle on top of a RecordStore."""

    def __init__(self, store):
        self.store = store

    def _get_owned(self, transaction_id, user_id):
        transaction = self.store.get_transaction(transaction_id)
        if not transaction or transaction.get("user_id") != user_id:
            raise NotFoundError("Transaction", transaction_id)
        return transaction

    def _get_party(self, party_id, user_id):
        party = self.store.get_party(party_id)
        if not party or party.get("user_id") != user_id:
            raise ValidationError(f"Party {party_id} not found", errors={"party_id": "not found"})
        return party

    def validate_transaction(self, user_id, header):
        """Business checks run before anything is written. Returns the party."""
        party = self._get_party(header["party_id"], user_id)
        number = header["transaction_number"]
        if self.store.get_transaction_by_number(user_id, number):
            raise ValidationError(
                f"Transaction number {number} already exists",
                errors={"transaction_number": "already exists"},
            )
        return party

    def create_transaction(self, user_id, transaction_data, items_data):
        """
        Create a transaction header and its line items, then overwrite the
        header's amount and balance_due with the computed grand total.

        Everything is validated before the first write. Items are written
        one by one; if one fails the header and earlier items stay and a
        PartialWriteError is raised.
        """
        if not transaction_data or items_data is None:
            raise ValidationError("Transaction and items are required")
        if not isinstance(items_data, list):
            raise ValidationError("items must be a list", errors={"items": "must be a list"})

        header = clean_transaction(transaction_data)
        items = [clean_transaction_item(item, index) for index, item in enumerate(items_data)]
        party = self.validate_transaction(user_id, header)

        header["user_id"] = user_id
        created = self.store.create_transaction(header)
        transaction_id = created["id"]
        logger.info("Created transaction %s (%s)", transaction_id, created["transaction_number"])

        created_items = []
        for item in items:
            try:
                created_items.append(
                    self.store.create_transaction_item({**item, "transaction_id": transaction_id})
                )
            except Exception as e:
                logger.error(
                    "Item write failed for transaction %s after %d of %d items: %s",
                    transaction_id, len(created_items), len(items), e,
                )
                raise PartialWriteError(transaction_id, created_items, len(items), cause=e) from e

        totals = calculate_totals(created_items, party)
        finalized = self.store.update_transaction(transaction_id, {
            "amount": totals["grand_total"],
            "balance_due": totals["grand_total"],
        })
        logger.debug("Transaction %s finalized, grand total %s", transaction_id, totals["grand_total"])

        return {**finalized, "items": created_items, "totals": totals}

    def get_transaction(self, transaction_id, user_id):
        transaction = self._get_owned(transaction_id, user_id)
        items = self.store.get_transaction_items_by_transaction_id(transaction_id)
        party = self.store.get_party(transaction["party_id"])
        return {
            **with_display_status(transaction),
            "items": items,
            "totals": calculate_totals(items, party),
        }

    def get_transaction_items(self, transaction_id, user_id):
        self._get_owned(transaction_id, user_id)
        return self.store.get_transaction_items_by_transaction_id(transaction_id)

    def list_transactions(self, user_id, transaction_type=None, status=None, start_date=None, end_date=None):
        errors = {}
        start = parse_datetime(start_date, "start_date", errors) if start_date else None
        end = parse_datetime(end_date, "end_date", errors) if end_date else None
        raise_if_errors(errors, "filters")

        transactions = self.store.list_transactions(
            user_id, transaction_type=transaction_type, status=status, start_date=start, end_date=end,
        )
        return [with_display_status(t) for t in transactions]

    def update_transaction(self, transaction_id, data, user_id):
        changes = clean_transaction(data or {}, partial=True)
        current = self._get_owned(transaction_id, user_id)

        if "party_id" in changes and changes["party_id"] != current["party_id"]:
            self._get_party(changes["party_id"], user_id)
        number = changes.get("transaction_number")
        if number and number != current["transaction_number"]:
            if self.store.get_transaction_by_number(user_id, number):
                raise ValidationError(
                    f"Transaction number {number} already exists",
                    errors={"transaction_number": "already exists"},
                )

        merged = {**current, **changes}
        if lenient_decimal(merged.get("balance_due")) > lenient_decimal(merged.get("amount")):
            raise ValidationError(
                "balance_due cannot exceed amount",
                errors={"balance_due": "cannot exceed amount"},
            )

        updated = self.store.update_transaction(transaction_id, changes)
        logger.info("Updated transaction %s fields: %s", transaction_id, ", ".join(sorted(changes)))
        return with_display_status(updated)

    def record_payment(self, transaction_id, amount, user_id):
        """Reduce the balance due by ``amount`` and move the status to partially_paid or paid."""
        transaction = self._get_owned(transaction_id, user_id)
        if transaction.get("status") in ("cancelled", "paid"):
            raise ValidationError(f"Cannot record payment - transaction is {transaction['status']}")

        paid = parse_decimal(amount)
        if paid is None or paid <= ZERO:
            raise ValidationError("amount must be greater than zero", errors={"amount": "must be positive"})

        balance = lenient_decimal(transaction.get("balance_due")) - paid
        if balance < ZERO:
            balance = ZERO
        status = "paid" if balance == ZERO else "partially_paid"

        updated = self.store.update_transaction(transaction_id, {"balance_due": balance, "status": status})
        logger.info("Payment of %s recorded on transaction %s, balance %s", paid, transaction_id, balance)
        return with_display_status(updated)

    def delete_transaction(self, transaction_id, user_id):
        self._get_owned(transaction_id, user_id)
        deleted = self.store.delete_transaction(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)
        return deleted
