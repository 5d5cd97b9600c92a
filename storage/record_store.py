"""
Record store interface.

Services talk to persistence only through ``RecordStore``. Backends
implement five primitives over named tables (insert, get, update, delete,
equality select); every named operation below is built on top of them.
Records cross the boundary as plain dicts.

Each primitive call is atomic on its own. There is no multi-record
transaction: callers that write several records can be interrupted
between writes.
"""
from abc import ABC, abstractmethod

from common.exceptions import NotFoundError
from items.item import LISTING_FIELDS
from reports.ageing import (
    PAYABLE_TYPE,
    RECEIVABLE_TYPE,
    ageing_buckets,
    open_balance_summary,
    open_transactions,
)

USERS = "users"
PARTIES = "parties"
ITEMS = "items"
TRANSACTIONS = "transactions"
TRANSACTION_ITEMS = "transaction_items"
BNPL_LIMITS = "bnpl_limits"
TALLY_SYNC_LOGS = "tally_sync_logs"

TABLES = (USERS, PARTIES, ITEMS, TRANSACTIONS, TRANSACTION_ITEMS, BNPL_LIMITS, TALLY_SYNC_LOGS)

RESOURCE_NAMES = {
    USERS: "User",
    PARTIES: "Party",
    ITEMS: "Item",
    TRANSACTIONS: "Transaction",
    TRANSACTION_ITEMS: "Transaction item",
    BNPL_LIMITS: "BNPL Limit",
    TALLY_SYNC_LOGS: "Tally sync log",
}


def _sort_key_date(field):
    def key(record):
        value = record.get(field)
        return (value is not None, value or 0)
    return key


class RecordStore(ABC):

    # ---- primitives ----

    @abstractmethod
    def _insert(self, table, data):
        """Write a new record, assigning ``id`` and its timestamp. Returns the record."""

    @abstractmethod
    def _get(self, table, record_id):
        """Return the record or None."""

    @abstractmethod
    def _update(self, table, record_id, changes):
        """Merge ``changes`` into the record. Returns the record, or None if absent."""

    @abstractmethod
    def _delete(self, table, record_id):
        """Remove the record. Returns True if it existed."""

    @abstractmethod
    def _select(self, table, **criteria):
        """Records whose fields equal ``criteria``, in id order."""

    def _update_or_raise(self, table, record_id, changes):
        record = self._update(table, record_id, changes)
        if record is None:
            raise NotFoundError(RESOURCE_NAMES[table], record_id)
        return record

    # ---- users ----

    def create_user(self, data):
        return self._insert(USERS, data)

    def get_user(self, user_id):
        return self._get(USERS, user_id)

    def get_user_by_username(self, username):
        matches = self._select(USERS, username=username)
        return matches[0] if matches else None

    # ---- parties ----

    def create_party(self, data):
        return self._insert(PARTIES, data)

    def get_party(self, party_id):
        return self._get(PARTIES, party_id)

    def get_parties_by_user_id(self, user_id):
        return self._select(PARTIES, user_id=user_id)

    def get_parties_by_type(self, user_id, party_type):
        return self._select(PARTIES, user_id=user_id, type=party_type)

    def update_party(self, party_id, changes):
        return self._update_or_raise(PARTIES, party_id, changes)

    # ---- items ----

    def create_item(self, data):
        return self._insert(ITEMS, data)

    def get_item(self, item_id):
        return self._get(ITEMS, item_id)

    def get_items_by_user_id(self, user_id):
        return self._select(ITEMS, user_id=user_id)

    def get_items_with_listings(self, user_id):
        return self._select(ITEMS, user_id=user_id, is_listed=True)

    def get_feature_products(self, limit=10):
        return self._select(ITEMS, is_listed=True, featured_product=True)[:limit]

    def update_item(self, item_id, changes):
        return self._update_or_raise(ITEMS, item_id, changes)

    def update_item_listing(self, item_id, listing_data):
        """Update storefront fields only; inventory fields are left untouched."""
        changes = {k: v for k, v in listing_data.items() if k in LISTING_FIELDS and v is not None}
        return self._update_or_raise(ITEMS, item_id, changes)

    # ---- transactions ----

    def create_transaction(self, data):
        return self._insert(TRANSACTIONS, data)

    def get_transaction(self, transaction_id):
        return self._get(TRANSACTIONS, transaction_id)

    def get_transaction_by_number(self, user_id, transaction_number):
        matches = self._select(TRANSACTIONS, user_id=user_id, transaction_number=transaction_number)
        return matches[0] if matches else None

    def get_transactions_by_user_id(self, user_id):
        return self._select(TRANSACTIONS, user_id=user_id)

    def get_transactions_by_type(self, user_id, transaction_type):
        return self._select(TRANSACTIONS, user_id=user_id, transaction_type=transaction_type)

    def get_transactions_by_party_id(self, user_id, party_id):
        return self._select(TRANSACTIONS, user_id=user_id, party_id=party_id)

    def get_recent_transactions(self, user_id, limit):
        transactions = self.get_transactions_by_user_id(user_id)
        transactions.sort(key=_sort_key_date("transaction_date"), reverse=True)
        return transactions[:limit]

    def list_transactions(self, user_id, transaction_type=None, status=None, start_date=None, end_date=None):
        """Owner's transactions, newest first, with optional equality and date-range filters."""
        criteria = {"user_id": user_id}
        if transaction_type:
            criteria["transaction_type"] = transaction_type
        if status:
            criteria["status"] = status
        transactions = self._select(TRANSACTIONS, **criteria)

        if start_date is not None:
            transactions = [t for t in transactions if t.get("transaction_date") and t["transaction_date"] >= start_date]
        if end_date is not None:
            transactions = [t for t in transactions if t.get("transaction_date") and t["transaction_date"] <= end_date]

        transactions.sort(key=_sort_key_date("transaction_date"), reverse=True)
        return transactions

    def update_transaction(self, transaction_id, changes):
        return self._update_or_raise(TRANSACTIONS, transaction_id, changes)

    def delete_transaction(self, transaction_id):
        """Delete a transaction together with its items. Returns the deleted header."""
        transaction = self._get(TRANSACTIONS, transaction_id)
        if transaction is None:
            raise NotFoundError("Transaction", transaction_id)
        for item in self.get_transaction_items_by_transaction_id(transaction_id):
            self._delete(TRANSACTION_ITEMS, item["id"])
        self._delete(TRANSACTIONS, transaction_id)
        return transaction

    # ---- transaction items ----

    def create_transaction_item(self, data):
        return self._insert(TRANSACTION_ITEMS, data)

    def get_transaction_items_by_transaction_id(self, transaction_id):
        return self._select(TRANSACTION_ITEMS, transaction_id=transaction_id)

    # ---- BNPL limits ----

    def create_bnpl_limit(self, data):
        return self._insert(BNPL_LIMITS, data)

    def get_bnpl_limit(self, limit_id):
        return self._get(BNPL_LIMITS, limit_id)

    def get_bnpl_limits_by_party_id(self, party_id):
        return self._select(BNPL_LIMITS, party_id=party_id)

    def get_bnpl_limits_by_user_id(self, user_id):
        return self._select(BNPL_LIMITS, user_id=user_id)

    def get_bnpl_limits_by_type(self, user_id, limit_type):
        return self._select(BNPL_LIMITS, user_id=user_id, limit_type=limit_type)

    def update_bnpl_limit(self, limit_id, changes):
        return self._update_or_raise(BNPL_LIMITS, limit_id, changes)

    # ---- Tally sync logs ----

    def create_tally_sync_log(self, data):
        return self._insert(TALLY_SYNC_LOGS, data)

    def get_tally_sync_logs(self, user_id):
        logs = self._select(TALLY_SYNC_LOGS, user_id=user_id)
        # Newest first; id breaks ties between logs written in the same instant
        logs.sort(key=lambda log: (log.get("synced_at"), log["id"]), reverse=True)
        return logs

    def get_recent_tally_sync_log(self, user_id):
        logs = self.get_tally_sync_logs(user_id)
        return logs[0] if logs else None

    # ---- receivables / payables ----

    def _open(self, user_id, transaction_type):
        return open_transactions(self.get_transactions_by_type(user_id, transaction_type), transaction_type)

    def get_open_receivables(self, user_id):
        return open_balance_summary(self._open(user_id, RECEIVABLE_TYPE))

    def get_open_payables(self, user_id):
        return open_balance_summary(self._open(user_id, PAYABLE_TYPE))

    def get_receivables_ageing(self, user_id, now=None):
        return ageing_buckets(self._open(user_id, RECEIVABLE_TYPE), now)

    def get_payables_ageing(self, user_id, now=None):
        return ageing_buckets(self._open(user_id, PAYABLE_TYPE), now)
