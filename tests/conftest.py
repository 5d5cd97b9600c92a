"""
Shared fixtures.

``store`` is parametrized over both backends so the store contract tests
run against the in-memory dicts and Flask-SQLAlchemy on sqlite alike.
"""
import sys
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import the top-level packages
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.config import TestConfig  # noqa: E402
from src.extensions import db  # noqa: E402
from src.main import create_app  # noqa: E402
from storage import MemoryRecordStore, SqlRecordStore  # noqa: E402


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def memory_store():
    return MemoryRecordStore()


@pytest.fixture(params=["memory", "sql"])
def store(request):
    if request.param == "memory":
        return MemoryRecordStore()
    request.getfixturevalue("app")
    return SqlRecordStore()
