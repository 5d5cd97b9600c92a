from flask import current_app

from storage.record_store import RecordStore
from storage.memory_store import MemoryRecordStore
from storage.sql_store import SqlRecordStore


def build_store(config):
    kind = config.get("RECORD_STORE", "sql")
    if kind == "memory":
        return MemoryRecordStore()
    if kind == "sql":
        return SqlRecordStore()
    raise ValueError(f"Unknown RECORD_STORE: {kind}")


def get_store():
    """The record store registered on the current Flask app."""
    return current_app.extensions["record_store"]


__all__ = ["RecordStore", "MemoryRecordStore", "SqlRecordStore", "build_store", "get_store"]
