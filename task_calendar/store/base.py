"""
Storage port for tasks.

Routes and services depend on this Protocol rather than a concrete backend,
so the SQLite store and the in-memory store are interchangeable.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol

from task_calendar.models.task_model import Task


class TaskStore(Protocol):
    def list_all(self) -> List[Task]:
        """All tasks, newest date first, then newest creation first."""
        ...

    def list_by_date(self, date: str) -> List[Task]:
        """Tasks whose date equals `date` exactly, newest creation first."""
        ...

    def create(
        self,
        *,
        text: str,
        date: str,
        completed: bool = False,
        task_id: Optional[str] = None,
    ) -> Task: ...

    def update(self, task_id: str, updates: Mapping[str, Any]) -> Task:
        """Apply the recognised fields in `updates`; raises TaskNotFound."""
        ...

    def delete(self, task_id: str) -> Dict[str, Any]:
        """Remove the task; raises TaskNotFound."""
        ...

    def count(self) -> int: ...

    def close(self) -> None: ...
