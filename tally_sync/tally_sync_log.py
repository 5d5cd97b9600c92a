from datetime import datetime
from src.extensions import db
from common.record_mixin import RecordMixin

SYNC_STATUSES = ("success", "failed", "partial")


class TallySyncLog(RecordMixin, db.Model):
    __tablename__ = "tally_sync_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    # What was pushed: transactions / parties / items
    sync_type = db.Column(db.String(50), nullable=False)
    status = db.Column(db.String(20), nullable=False)
    records_synced = db.Column(db.Integer, default=0, nullable=False)
    message = db.Column(db.Text, nullable=True)
    synced_at = db.Column(db.DateTime, default=datetime.utcnow)
