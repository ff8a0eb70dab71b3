from typing import Any, Dict, List, Mapping, Optional

from task_calendar.errors import TaskNotFound, ValidationError
from task_calendar.models.task_model import Task, new_task_id, pick_updates
from task_calendar.store.base import TaskStore

HEALTH_PAYLOAD = {"status": "OK", "message": "Task Calendar API is running"}
UPDATE_INVALID_MESSAGE = "Text and date must be non-empty strings"


def _as_body(payload: Any) -> Dict[str, Any]:
    return payload if isinstance(payload, dict) else {}


class TaskService:
    """Validates request input and delegates to a TaskStore.

    Store errors propagate unchanged; the HTTP layer decides which status
    code and message each one becomes.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    def list_tasks(self) -> List[Task]:
        return self.store.list_all()

    def list_tasks_for_date(self, date: str) -> List[Task]:
        # Any string is accepted; a malformed date simply matches nothing.
        return self.store.list_by_date(date)

    def create_task(self, payload: Optional[Mapping[str, Any]]) -> Task:
        body = _as_body(payload)
        text = body.get("text")
        date = body.get("date")

        if not isinstance(text, str) or not isinstance(date, str) or not date:
            raise ValidationError()
        text = text.strip()
        if not text:
            raise ValidationError()

        return self.store.create(
            task_id=new_task_id(),
            text=text,
            completed=bool(body.get("completed", False)),
            date=date,
        )

    def update_task(self, task_id: str, payload: Optional[Mapping[str, Any]]) -> Task:
        updates = pick_updates(_as_body(payload))
        if "text" in updates:
            text = updates["text"]
            if not isinstance(text, str) or not text.strip():
                raise ValidationError(UPDATE_INVALID_MESSAGE)
            updates["text"] = text.strip()
        if "date" in updates:
            date = updates["date"]
            if not isinstance(date, str) or not date:
                raise ValidationError(UPDATE_INVALID_MESSAGE)
        return self.store.update(task_id, updates)

    def toggle_task(self, task_id: str) -> Task:
        # Read-then-write without a compare-and-swap: two concurrent toggles
        # can both read the same state, and the last update wins.
        current = next((t for t in self.store.list_all() if t.id == task_id), None)
        if current is None:
            raise TaskNotFound(task_id)
        return self.store.update(task_id, {"completed": not current.completed})

    def delete_task(self, task_id: str) -> Dict[str, Any]:
        return self.store.delete(task_id)

    @staticmethod
    def health() -> Dict[str, str]:
        return dict(HEALTH_PAYLOAD)
