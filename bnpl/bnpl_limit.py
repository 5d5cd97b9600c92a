from datetime import datetime
from src.extensions import db
from common.record_mixin import RecordMixin

LIMIT_TYPES = ("purchase", "sales")


class BnplLimit(RecordMixin, db.Model):
    __tablename__ = "bnpl_limits"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    party_id = db.Column(db.Integer, db.ForeignKey("parties.id"), nullable=False, index=True)

    # purchase / sales
    limit_type = db.Column(db.String(20), nullable=False)
    total_limit = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    used_limit = db.Column(db.Numeric(14, 2), nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
