from datetime import datetime
from src.extensions import db
from common.record_mixin import RecordMixin


class User(RecordMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False)
    company_name = db.Column(db.String(255), nullable=True)
    gstin = db.Column(db.String(50), nullable=True)
    email = db.Column(db.String(120), nullable=True)
    phone = db.Column(db.String(20), nullable=True)
    role = db.Column(db.String(20), default="admin", nullable=False)
    # Registered state of the business
    state = db.Column(db.String(100), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
