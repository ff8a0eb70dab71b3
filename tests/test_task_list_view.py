from datetime import date

from task_calendar.models.task_model import Task
from task_calendar.ui.task_list_view import build_new_task, derive_task_list

TASKS = [
    Task(id="1", text="Task for today", date="2025-11-06"),
    Task(id="2", text="Another task for today", date="2025-11-06", completed=True),
    Task(id="3", text="Task for tomorrow", date="2025-11-07"),
]


def test_filters_by_selected_date_and_counts() -> None:
    view = derive_task_list(TASKS, date(2025, 11, 6))

    assert view.date_key == "2025-11-06"
    assert [t.id for t in view.tasks] == ["1", "2"]
    assert (view.total, view.completed, view.incomplete) == (2, 1, 1)
    assert view.count_label == "2 tasks"
    assert view.summary == "1 of 2 completed"
    assert view.heading == "Tasks for Thursday, November 6, 2025"


def test_single_task_label() -> None:
    view = derive_task_list(TASKS, date(2025, 11, 7))

    assert view.count_label == "1 task"


def test_empty_day() -> None:
    view = derive_task_list(TASKS, date(2025, 12, 25))

    assert view.is_empty
    assert view.count_label == "0 tasks"
    assert view.summary is None
    assert view.empty_state == ("No tasks for this day", "Add a task to get started!")
    assert derive_task_list(TASKS, date(2025, 11, 6)).empty_state is None


def test_new_task_draft_is_trimmed_and_dated() -> None:
    assert build_new_task("  Walk the dog ", date(2025, 11, 6)) == {
        "text": "Walk the dog",
        "completed": False,
        "date": "2025-11-06",
    }


def test_blank_draft_is_rejected() -> None:
    assert build_new_task("", date(2025, 11, 6)) is None
    assert build_new_task("   ", date(2025, 11, 6)) is None
