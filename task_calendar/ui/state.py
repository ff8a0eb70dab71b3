import dataclasses
import logging
from datetime import date
from typing import Optional, Tuple

from task_calendar.errors import ApiError
from task_calendar.models.task_model import Task
from task_calendar.ui import calendar_grid
from task_calendar.ui.task_list_view import TaskListView, build_new_task, derive_task_list

logger = logging.getLogger(__name__)


class TaskBoardState:
    """
    Client-side state behind the calendar and task list.

    This object is the only owner of the task collection. The collection is
    an immutable tuple; every mutation swaps in a new tuple, and only after
    the API call succeeds. On failure the message lands in `error` and the
    tasks stay as they were.
    """

    def __init__(self, client, selected_date: Optional[date] = None):
        self.client = client
        self.selected_date = selected_date or date.today()
        self.tasks: Tuple[Task, ...] = ()
        self.loading = False
        self.error: Optional[str] = None
        self.load_failed = False

    @property
    def can_retry(self) -> bool:
        """A failed initial load is retried by calling load_tasks() again."""
        return self.load_failed

    def _fail(self, action: str, exc: ApiError) -> None:
        logger.warning("Failed to %s: %s", action, exc.message)
        self.error = exc.message

    # ---- task mutations ----

    async def load_tasks(self) -> None:
        self.loading = True
        self.error = None
        try:
            self.tasks = tuple(await self.client.get_all_tasks())
            self.load_failed = False
        except ApiError as exc:
            self.load_failed = True
            self._fail("load tasks", exc)
        finally:
            self.loading = False

    async def add_task(self, text: str) -> Optional[Task]:
        draft = build_new_task(text, self.selected_date)
        if draft is None:
            return None
        self.error = None
        try:
            created = await self.client.create_task(draft["text"], draft["date"], draft["completed"])
        except ApiError as exc:
            self._fail("add task", exc)
            return None
        self.tasks = self.tasks + (created,)
        return created

    async def toggle_task(self, task_id: str) -> None:
        self.error = None
        try:
            updated = await self.client.toggle_task(task_id)
        except ApiError as exc:
            self._fail("toggle task", exc)
            return
        self.tasks = tuple(
            dataclasses.replace(t, completed=updated.completed) if t.id == task_id else t
            for t in self.tasks
        )

    async def update_task(self, task_id: str, **updates) -> None:
        self.error = None
        try:
            updated = await self.client.update_task(task_id, **updates)
        except ApiError as exc:
            self._fail("update task", exc)
            return
        self.tasks = tuple(updated if t.id == task_id else t for t in self.tasks)

    async def delete_task(self, task_id: str) -> None:
        self.error = None
        try:
            await self.client.delete_task(task_id)
        except ApiError as exc:
            self._fail("delete task", exc)
            return
        self.tasks = tuple(t for t in self.tasks if t.id != task_id)

    # ---- date selection ----

    def select_date(self, selected: date) -> None:
        self.selected_date = selected

    def show_previous_month(self) -> None:
        self.selected_date = calendar_grid.previous_month(self.selected_date)

    def show_next_month(self) -> None:
        self.selected_date = calendar_grid.next_month(self.selected_date)

    def select_day(self, day: int) -> None:
        self.selected_date = calendar_grid.select_day(self.selected_date, day)

    # ---- derived views ----

    def grid(self, today: Optional[date] = None) -> calendar_grid.CalendarGrid:
        return calendar_grid.build_grid(self.selected_date, today=today)

    def task_list(self) -> TaskListView:
        return derive_task_list(self.tasks, self.selected_date)
