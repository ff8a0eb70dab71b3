from concurrent.futures import ThreadPoolExecutor

import pytest


@pytest.fixture(params=["memory", "sqlite"])
def api(request):
    fixture = "client" if request.param == "memory" else "sqlite_client"
    return request.getfixturevalue(fixture)


def test_complete_task_workflow(api) -> None:
    created = api.post("/api/tasks", json={"text": "A", "date": "2025-11-06"})
    assert created.status_code == 201
    task = created.get_json()
    assert task["completed"] is False
    task_id = task["id"]

    listed = api.get("/api/tasks").get_json()
    assert len(listed) == 1
    assert listed[0]["id"] == task_id

    by_date = api.get("/api/tasks/date/2025-11-06").get_json()
    assert [t["id"] for t in by_date] == [task_id]

    updated = api.put(f"/api/tasks/{task_id}", json={"text": "A, revised"}).get_json()
    assert updated["text"] == "A, revised"
    assert updated["date"] == "2025-11-06"

    toggled = api.patch(f"/api/tasks/{task_id}/toggle").get_json()
    assert toggled["completed"] is True

    deleted = api.delete(f"/api/tasks/{task_id}")
    assert deleted.status_code == 200
    assert deleted.get_json() == {"deleted": True, "id": task_id}

    assert api.get("/api/tasks").get_json() == []
    assert api.patch(f"/api/tasks/{task_id}/toggle").status_code == 404
    assert api.put(f"/api/tasks/{task_id}", json={"completed": False}).status_code == 404
    assert api.delete(f"/api/tasks/{task_id}").status_code == 404


def test_tasks_across_dates_and_bulk_toggle(api) -> None:
    seeds = [
        {"text": "Task 1", "completed": False, "date": "2025-11-06"},
        {"text": "Task 2", "completed": True, "date": "2025-11-06"},
        {"text": "Task 3", "completed": False, "date": "2025-11-07"},
        {"text": "Task 4", "completed": True, "date": "2025-11-07"},
    ]
    created = [api.post("/api/tasks", json=s).get_json() for s in seeds]

    assert len(api.get("/api/tasks").get_json()) == 4
    for day in ("2025-11-06", "2025-11-07"):
        tasks = api.get(f"/api/tasks/date/{day}").get_json()
        assert len(tasks) == 2
        assert all(t["date"] == day for t in tasks)

    for task in created:
        assert api.patch(f"/api/tasks/{task['id']}/toggle").status_code == 200

    after = {t["id"]: t["completed"] for t in api.get("/api/tasks").get_json()}
    assert after == {t["id"]: not t["completed"] for t in created}


def test_update_with_empty_body_keeps_fields(api) -> None:
    task = api.post("/api/tasks", json={"text": "Keep me", "date": "2025-11-06"}).get_json()

    resp = api.put(f"/api/tasks/{task['id']}", json={})

    assert resp.status_code == 200
    body = resp.get_json()
    assert (body["text"], body["completed"], body["date"]) == ("Keep me", False, "2025-11-06")


@pytest.mark.parametrize("backend", ["app", "sqlite_app"])
def test_concurrent_creates_all_land(request, backend) -> None:
    flask_app = request.getfixturevalue(backend)

    def create(i):
        return flask_app.test_client().post(
            "/api/tasks",
            json={"text": f"Concurrent task {i + 1}", "completed": i % 2 == 0, "date": "2025-11-06"},
        )

    with ThreadPoolExecutor(max_workers=10) as pool:
        responses = list(pool.map(create, range(10)))

    assert [r.status_code for r in responses] == [201] * 10
    ids = {r.get_json()["id"] for r in responses}
    assert len(ids) == 10

    client = flask_app.test_client()
    stored = client.get("/api/tasks/date/2025-11-06").get_json()
    assert {t["id"] for t in stored} == ids
    for task_id in ids:
        assert client.patch(f"/api/tasks/{task_id}/toggle").status_code == 200


@pytest.mark.parametrize(
    "payload",
    [
        {"text": None},
        {"text": ""},
        {"text": "   "},
        {"text": 7},
        {"date": None},
        {"date": ""},
        {"date": 20251106},
    ],
)
def test_update_rejects_invalid_text_or_date(api, payload) -> None:
    task = api.post("/api/tasks", json={"text": "Original", "date": "2025-11-06"}).get_json()

    resp = api.put(f"/api/tasks/{task['id']}", json=payload)

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Text and date must be non-empty strings"}
    stored = api.get("/api/tasks").get_json()
    assert [(t["text"], t["date"]) for t in stored] == [("Original", "2025-11-06")]


def test_update_trims_text(api) -> None:
    task = api.post("/api/tasks", json={"text": "Original", "date": "2025-11-06"}).get_json()

    resp = api.put(f"/api/tasks/{task['id']}", json={"text": "  Revised  "})

    assert resp.status_code == 200
    assert resp.get_json()["text"] == "Revised"
