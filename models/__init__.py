from src.extensions import db

# Import all models so migrations can detect them
from user.user import User
from parties.party import Party
from items.item import Item
from transactions.transaction import Transaction
from transactions.transaction_item import TransactionItem
from bnpl.bnpl_limit import BnplLimit
from tally_sync.tally_sync_log import TallySyncLog


__all__ = [
    "db",
    "User",
    "Party",
    "Item",
    "Transaction",
    "TransactionItem",
    "BnplLimit",
    "TallySyncLog",
]
