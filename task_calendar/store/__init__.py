from task_calendar.store.base import TaskStore
from task_calendar.store.memory_store import InMemoryTaskStore
from task_calendar.store.sqlite_store import SQLiteTaskStore

__all__ = ["TaskStore", "InMemoryTaskStore", "SQLiteTaskStore"]
