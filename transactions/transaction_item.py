from datetime import datetime
from src.extensions import db
from common.record_mixin import RecordMixin


class TransactionItem(RecordMixin, db.Model):
    __tablename__ = "transaction_items"

    id = db.Column(db.Integer, primary_key=True)
    transaction_id = db.Column(db.Integer, db.ForeignKey("transactions.id"), nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey("items.id"), nullable=False)
    description = db.Column(db.Text, nullable=True)
    quantity = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    rate = db.Column(db.Numeric(12, 2), nullable=False, default=0)

    # quantity x rate, before tax
    amount = db.Column(db.Numeric(14, 2), default=0)

    # Tax rate percentage
    tax_rate = db.Column(db.Numeric(5, 2), default=0)
    tax_amount = db.Column(db.Numeric(14, 2), default=0)
    total_amount = db.Column(db.Numeric(14, 2), default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
