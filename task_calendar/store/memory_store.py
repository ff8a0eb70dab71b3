import dataclasses
import itertools
import threading
from typing import Any, Dict, List, Mapping, Optional

from task_calendar.errors import StorageFailure, TaskNotFound
from task_calendar.models.task_model import Task, pick_updates, utc_timestamp


class InMemoryTaskStore:
    """
    Dict-backed store used by tests and by TASK_STORE=memory.

    Ids default to an increasing counter ("1", "2", ...). A single lock makes
    every operation atomic.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: Dict[str, Task] = {}
        self._order: Dict[str, int] = {}
        self._seq = itertools.count(1)
        self._next_id = 1

    def _sorted(self, tasks) -> List[Task]:
        newest_first = sorted(tasks, key=lambda t: self._order[t.id], reverse=True)
        return sorted(newest_first, key=lambda t: t.date, reverse=True)

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def list_all(self) -> List[Task]:
        with self._lock:
            return self._sorted(self._tasks.values())

    def list_by_date(self, date: str) -> List[Task]:
        with self._lock:
            matching = [t for t in self._tasks.values() if t.date == date]
            return sorted(matching, key=lambda t: self._order[t.id], reverse=True)

    def create(
        self,
        *,
        text: str,
        date: str,
        completed: bool = False,
        task_id: Optional[str] = None,
    ) -> Task:
        with self._lock:
            if task_id is None:
                while str(self._next_id) in self._tasks:
                    self._next_id += 1
                task_id = str(self._next_id)
            elif task_id in self._tasks:
                raise StorageFailure(f"Task id {task_id!r} already exists")
            self._next_id += 1
            now = utc_timestamp()
            task = Task(
                id=task_id,
                text=text,
                date=date,
                completed=bool(completed),
                created_at=now,
                updated_at=now,
            )
            self._tasks[task_id] = task
            self._order[task_id] = next(self._seq)
            return task

    def update(self, task_id: str, updates: Mapping[str, Any]) -> Task:
        with self._lock:
            current = self._tasks.get(task_id)
            if current is None:
                raise TaskNotFound(task_id)
            changes = pick_updates(updates)
            if "completed" in changes:
                changes["completed"] = bool(changes["completed"])
            merged = dataclasses.replace(current, updated_at=utc_timestamp(), **changes)
            self._tasks[task_id] = merged
            return merged

    def delete(self, task_id: str) -> Dict[str, Any]:
        with self._lock:
            if task_id not in self._tasks:
                raise TaskNotFound(task_id)
            del self._tasks[task_id]
            del self._order[task_id]
            return {"deleted": True, "id": task_id}

    def seed(self, tasks) -> None:
        """Replace the contents with `tasks` (Task objects or dicts), in creation order."""
        with self._lock:
            self._tasks.clear()
            self._order.clear()
            for item in tasks:
                task = item if isinstance(item, Task) else Task.from_dict(item)
                self._tasks[task.id] = task
                self._order[task.id] = next(self._seq)
            numeric = [int(t) for t in self._tasks if t.isdigit()]
            self._next_id = max(numeric, default=0) + 1

    def close(self) -> None:
        return
