import pytest

from task_calendar.app import create_app
from task_calendar.config import TestConfig
from task_calendar.store.memory_store import InMemoryTaskStore
from task_calendar.store.sqlite_store import SQLiteTaskStore


@pytest.fixture()
def memory_store():
    return InMemoryTaskStore()


@pytest.fixture()
def sqlite_store(tmp_path):
    store = SQLiteTaskStore(tmp_path / "tasks.db")
    yield store
    store.close()


@pytest.fixture()
def app(memory_store):
    """App wired to a fresh in-memory store through the create_app injection seam."""
    return create_app(TestConfig, store=memory_store)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def sqlite_app(sqlite_store):
    return create_app(TestConfig, store=sqlite_store)


@pytest.fixture()
def sqlite_client(sqlite_app):
    return sqlite_app.test_client()
