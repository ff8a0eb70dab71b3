from datetime import date

import pytest

from task_calendar.errors import ApiError
from task_calendar.ui.state import TaskBoardState

from .fakes import FakeApiClient

DAY = date(2025, 11, 6)


@pytest.fixture()
def api():
    return FakeApiClient()


@pytest.fixture()
def board(api):
    return TaskBoardState(api, selected_date=DAY)


@pytest.mark.asyncio
async def test_load_tasks(board, api) -> None:
    api.store.create(text="existing", date="2025-11-06")

    await board.load_tasks()

    assert [t.text for t in board.tasks] == ["existing"]
    assert board.loading is False
    assert board.error is None


@pytest.mark.asyncio
async def test_failed_load_offers_retry(board, api) -> None:
    api.fail_with = ApiError("HTTP error: 500", status=500)

    await board.load_tasks()

    assert board.error == "HTTP error: 500"
    assert board.can_retry
    assert board.loading is False

    api.fail_with = None
    await board.load_tasks()

    assert board.error is None
    assert not board.can_retry


@pytest.mark.asyncio
async def test_add_task_appends_new_collection(board) -> None:
    before = board.tasks

    created = await board.add_task("  Buy milk ")

    assert created.text == "Buy milk"
    assert created.date == "2025-11-06"
    assert board.tasks == before + (created,)
    assert before == ()


@pytest.mark.asyncio
async def test_blank_task_sends_nothing(board, api) -> None:
    assert await board.add_task("   ") is None

    assert api.calls == []
    assert board.tasks == ()


@pytest.mark.asyncio
async def test_toggle_update_delete(board) -> None:
    task = await board.add_task("Chore")
    snapshot = board.tasks

    await board.toggle_task(task.id)
    assert board.tasks[0].completed is True
    assert snapshot[0].completed is False

    await board.update_task(task.id, text="Chore, done properly")
    assert board.tasks[0].text == "Chore, done properly"

    await board.delete_task(task.id)
    assert board.tasks == ()


@pytest.mark.asyncio
async def test_failed_mutation_keeps_tasks_and_records_error(board, api) -> None:
    task = await board.add_task("Keep me")
    api.fail_with = ApiError("Task not found", status=404)

    await board.delete_task(task.id)

    assert board.tasks[0].id == task.id
    assert board.error == "Task not found"


@pytest.mark.asyncio
async def test_views_follow_selected_date(board) -> None:
    await board.add_task("Today")
    board.show_next_month()

    assert board.selected_date == date(2025, 12, 1)
    assert board.task_list().is_empty

    board.show_previous_month()
    board.select_day(6)
    assert board.task_list().total == 1
    grid = board.grid(today=date(2025, 11, 1))
    assert [c.day for c in grid.day_cells() if c.selected] == [6]
