from datetime import datetime
from src.extensions import db
from common.record_mixin import RecordMixin

PARTY_TYPES = ("customer", "vendor")


class Party(RecordMixin, db.Model):
    __tablename__ = "parties"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    # Customer or vendor name
    name = db.Column(db.String(255), nullable=False)

    # customer / vendor
    type = db.Column(db.String(20), nullable=False)

    # GST / Tax Number
    gstin = db.Column(db.String(50), nullable=True)

    contact_person = db.Column(db.String(255), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(50), nullable=True)
    address = db.Column(db.Text, nullable=True)
    city = db.Column(db.String(100), nullable=True)

    # Drives IGST vs CGST/SGST on the tax breakup
    state = db.Column(db.String(100), nullable=True)
    pincode = db.Column(db.String(20), nullable=True)

    credit_limit = db.Column(db.Numeric(14, 2), default=0)

    # Credit period in days
    credit_period = db.Column(db.Integer, nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
