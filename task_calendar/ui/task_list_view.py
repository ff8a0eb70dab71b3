from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Tuple

from task_calendar.models.task_model import Task
from task_calendar.ui.calendar_grid import MONTH_NAMES

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
EMPTY_TITLE = "No tasks for this day"
EMPTY_SUBTITLE = "Add a task to get started!"


def date_key(selected: date) -> str:
    return selected.isoformat()


def format_heading(selected: date) -> str:
    # e.g. "Tasks for Thursday, November 6, 2025"
    return (
        f"Tasks for {DAY_NAMES[selected.weekday()]}, "
        f"{MONTH_NAMES[selected.month - 1]} {selected.day}, {selected.year}"
    )


@dataclass(frozen=True)
class TaskListView:
    date_key: str
    heading: str
    tasks: Tuple[Task, ...]

    @property
    def total(self) -> int:
        return len(self.tasks)

    @property
    def completed(self) -> int:
        return sum(1 for t in self.tasks if t.completed)

    @property
    def incomplete(self) -> int:
        return self.total - self.completed

    @property
    def is_empty(self) -> bool:
        return not self.tasks

    @property
    def count_label(self) -> str:
        return f"{self.total} task{'' if self.total == 1 else 's'}"

    @property
    def empty_state(self) -> Optional[Tuple[str, str]]:
        return (EMPTY_TITLE, EMPTY_SUBTITLE) if self.is_empty else None

    @property
    def summary(self) -> Optional[str]:
        if self.is_empty:
            return None
        return f"{self.completed} of {self.total} completed"


def derive_task_list(tasks: Iterable[Task], selected: date) -> TaskListView:
    key = date_key(selected)
    return TaskListView(
        date_key=key,
        heading=format_heading(selected),
        tasks=tuple(t for t in tasks if t.date == key),
    )


def build_new_task(text: str, selected: date) -> Optional[dict]:
    """Draft for a new task, or None when there is nothing to submit."""
    text = (text or "").strip()
    if not text:
        return None
    return {"text": text, "completed": False, "date": date_key(selected)}
