from flask import current_app

from task_calendar.services.task_service import TaskService
from task_calendar.store.memory_store import InMemoryTaskStore
from task_calendar.store.sqlite_store import SQLiteTaskStore

EXTENSION_KEY = "task_calendar"


def build_store(config):
    kind = (config.get("TASK_STORE") or "sqlite").lower()
    if kind == "memory":
        return InMemoryTaskStore()
    if kind == "sqlite":
        return SQLiteTaskStore(config["DATABASE_PATH"])
    raise ValueError(f"Unknown TASK_STORE {kind!r}; expected 'sqlite' or 'memory'")


def init_app(app, store=None):
    """Attach a store (the injected one, or one built from config) and its service."""
    if store is None:
        store = build_store(app.config)
    app.extensions[EXTENSION_KEY] = {"store": store, "service": TaskService(store)}
    app.logger.info("Task store: %s", type(store).__name__)
    return store


def get_store():
    return current_app.extensions[EXTENSION_KEY]["store"]


def get_service() -> TaskService:
    return current_app.extensions[EXTENSION_KEY]["service"]


def close_store(app):
    state = app.extensions.get(EXTENSION_KEY)
    if state is not None:
        state["store"].close()
