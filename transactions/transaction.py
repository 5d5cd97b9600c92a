from datetime import datetime
from src.extensions import db
from common.record_mixin import RecordMixin

TRANSACTION_TYPES = (
    "sales_invoice", "purchase_bill", "receipt", "payment",
    "credit_note", "debit_note", "sales_order", "purchase_order",
)

TRANSACTION_STATUSES = (
    "pending", "partially_paid", "paid", "overdue",
    "cancelled", "using_bnpl", "completed",
)

# Statuses that still carry an outstanding balance
OPEN_STATUSES = ("pending", "overdue", "partially_paid")


class Transaction(RecordMixin, db.Model):
    __tablename__ = "transactions"
    __table_args__ = (
        db.UniqueConstraint("user_id", "transaction_number", name="uq_transactions_user_number"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    transaction_number = db.Column(db.String(100), nullable=False)
    transaction_type = db.Column(db.String(50), nullable=False, index=True)
    transaction_date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    party_id = db.Column(db.Integer, db.ForeignKey("parties.id"), nullable=False, index=True)

    # Grand total, overwritten once the items are written
    amount = db.Column(db.Numeric(14, 2), default=0)
    balance_due = db.Column(db.Numeric(14, 2), default=0)

    due_date = db.Column(db.DateTime, nullable=True)
    status = db.Column(db.String(50), default="pending", nullable=False)
    is_bnpl = db.Column(db.Boolean, default=False, nullable=False)
    # Pushed to Tally
    is_sync = db.Column(db.Boolean, default=False, nullable=False)
    reference = db.Column(db.String(255), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
