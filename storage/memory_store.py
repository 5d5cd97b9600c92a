from datetime import datetime

from storage.record_store import RecordStore, TABLES, TALLY_SYNC_LOGS


class MemoryRecordStore(RecordStore):
    """Dict-backed store with per-table integer counters. Records are copied in and out."""

    def __init__(self):
        self._tables = {table: {} for table in TABLES}
        self._counters = {table: 1 for table in TABLES}

    def _insert(self, table, data):
        record_id = self._counters[table]
        self._counters[table] += 1
        timestamp_field = "synced_at" if table == TALLY_SYNC_LOGS else "created_at"
        record = {**data, "id": record_id, timestamp_field: datetime.utcnow()}
        self._tables[table][record_id] = record
        return dict(record)

    def _get(self, table, record_id):
        record = self._tables[table].get(record_id)
        return dict(record) if record is not None else None

    def _update(self, table, record_id, changes):
        record = self._tables[table].get(record_id)
        if record is None:
            return None
        updated = {**record, **changes, "id": record_id}
        self._tables[table][record_id] = updated
        return dict(updated)

    def _delete(self, table, record_id):
        return self._tables[table].pop(record_id, None) is not None

    def _select(self, table, **criteria):
        return [
            dict(record)
            for _, record in sorted(self._tables[table].items())
            if all(record.get(field) == value for field, value in criteria.items())
        ]
