from flask import Blueprint, current_app, jsonify, request

from task_calendar.errors import TaskNotFound, ValidationError
from task_calendar.utils.db import get_service


tasks_bp = Blueprint("tasks", __name__)


def _failure(message, exc):
    # Real cause goes to the log only; clients get the per-endpoint message.
    current_app.logger.exception("%s: %s", message, exc)
    return jsonify(error=message), 500


@tasks_bp.get("/", strict_slashes=False)
def list_tasks():
    try:
        tasks = get_service().list_tasks()
    except Exception as exc:  # noqa: BLE001
        return _failure("Failed to fetch tasks", exc)
    return jsonify([t.to_dict() for t in tasks]), 200


@tasks_bp.get("/date/<date>")
def list_tasks_for_date(date):
    try:
        tasks = get_service().list_tasks_for_date(date)
    except Exception as exc:  # noqa: BLE001
        return _failure("Failed to fetch tasks for date", exc)
    return jsonify([t.to_dict() for t in tasks]), 200


@tasks_bp.post("/", strict_slashes=False)
def create_task():
    payload = request.get_json(silent=True) or {}
    try:
        task = get_service().create_task(payload)
    except ValidationError as exc:
        return jsonify(error=exc.message), 400
    except Exception as exc:  # noqa: BLE001
        return _failure("Failed to create task", exc)
    return jsonify(task.to_dict()), 201


@tasks_bp.put("/<task_id>")
def update_task(task_id):
    payload = request.get_json(silent=True) or {}
    try:
        task = get_service().update_task(task_id, payload)
    except ValidationError as exc:
        return jsonify(error=exc.message), 400
    except TaskNotFound:
        return jsonify(error="Task not found"), 404
    except Exception as exc:  # noqa: BLE001
        return _failure("Failed to update task", exc)
    return jsonify(task.to_dict()), 200


@tasks_bp.patch("/<task_id>/toggle")
def toggle_task(task_id):
    try:
        task = get_service().toggle_task(task_id)
    except TaskNotFound:
        return jsonify(error="Task not found"), 404
    except Exception as exc:  # noqa: BLE001
        return _failure("Failed to toggle task", exc)
    return jsonify(task.to_dict()), 200


@tasks_bp.delete("/<task_id>")
def delete_task(task_id):
    try:
        result = get_service().delete_task(task_id)
    except TaskNotFound:
        return jsonify(error="Task not found"), 404
    except Exception as exc:  # noqa: BLE001
        return _failure("Failed to delete task", exc)
    return jsonify(result), 200
