import logging

from sqlalchemy.exc import SQLAlchemyError

from src.extensions import db
from common.exceptions import NotFoundError
from user.user import User
from parties.party import Party
from items.item import Item
from transactions.transaction import Transaction
from transactions.transaction_item import TransactionItem
from bnpl.bnpl_limit import BnplLimit
from tally_sync.tally_sync_log import TallySyncLog
from storage.record_store import (
    RecordStore, USERS, PARTIES, ITEMS, TRANSACTIONS, TRANSACTION_ITEMS, BNPL_LIMITS, TALLY_SYNC_LOGS,
)

logger = logging.getLogger(__name__)

MODELS = {
    USERS: User,
    PARTIES: Party,
    ITEMS: Item,
    TRANSACTIONS: Transaction,
    TRANSACTION_ITEMS: TransactionItem,
    BNPL_LIMITS: BnplLimit,
    TALLY_SYNC_LOGS: TallySyncLog,
}


class SqlRecordStore(RecordStore):
    """
    Flask-SQLAlchemy backend. Must be used inside an application context.

    Every write commits on its own, so each record is atomic but a sequence
    of writes is not.
    """

    def _commit(self):
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise

    def _insert(self, table, data):
        obj = MODELS[table](**data)
        db.session.add(obj)
        self._commit()
        return obj.to_dict()

    def _get(self, table, record_id):
        obj = db.session.get(MODELS[table], record_id)
        return obj.to_dict() if obj else None

    def _update(self, table, record_id, changes):
        obj = db.session.get(MODELS[table], record_id)
        if not obj:
            return None
        for field, value in changes.items():
            setattr(obj, field, value)
        self._commit()
        return obj.to_dict()

    def _delete(self, table, record_id):
        obj = db.session.get(MODELS[table], record_id)
        if not obj:
            return False
        db.session.delete(obj)
        self._commit()
        return True

    def _select(self, table, **criteria):
        model = MODELS[table]
        return [obj.to_dict() for obj in model.query.filter_by(**criteria).order_by(model.id).all()]

    def list_transactions(self, user_id, transaction_type=None, status=None, start_date=None, end_date=None):
        q = Transaction.query.filter(Transaction.user_id == user_id)
        if transaction_type:
            q = q.filter(Transaction.transaction_type == transaction_type)
        if status:
            q = q.filter(Transaction.status == status)
        if start_date is not None:
            q = q.filter(Transaction.transaction_date >= start_date)
        if end_date is not None:
            q = q.filter(Transaction.transaction_date <= end_date)
        q = q.order_by(Transaction.transaction_date.desc(), Transaction.id.desc())
        return [t.to_dict() for t in q.all()]

    def delete_transaction(self, transaction_id):
        # Single commit for header and items, unlike the generic per-record path
        obj = db.session.get(Transaction, transaction_id)
        if not obj:
            raise NotFoundError("Transaction", transaction_id)
        transaction = obj.to_dict()
        TransactionItem.query.filter_by(transaction_id=transaction_id).delete()
        db.session.delete(obj)
        self._commit()
        logger.debug("Deleted transaction %s and its items", transaction_id)
        return transaction
