import asyncio
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from task_calendar.config import Config
from task_calendar.errors import ApiError
from task_calendar.models.task_model import Task, pick_updates

logger = logging.getLogger(__name__)


def _segment(value) -> str:
    # Dates and ids are opaque; keep "/" or "?" from changing the route.
    return quote(str(value), safe="")


def _to_task(data) -> Task:
    try:
        return Task.from_dict(data)
    except (KeyError, TypeError, AttributeError) as exc:
        raise ApiError(f"Malformed task in response: {exc!r}") from exc


def _to_tasks(data) -> List[Task]:
    if not isinstance(data, list):
        raise ApiError("Malformed task list in response")
    return [_to_task(item) for item in data]


class ApiClient:
    """Async wrapper around the Task Calendar HTTP API.

    Requests go through a blocking `requests.Session` on a worker thread, so
    each coroutine suspends until the response arrives. There are no retries.
    Every failure, including connection errors, surfaces as `ApiError`.
    """

    def __init__(self, base_url: Optional[str] = None, session=None, timeout: float = 10.0):
        self.base_url = (base_url or Config.API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _send(self, method: str, endpoint: str, payload: Optional[Dict[str, Any]] = None):
        url = f"{self.base_url}{endpoint}"
        kwargs: Dict[str, Any] = {"headers": {"Content-Type": "application/json"}, "timeout": self.timeout}
        if payload is not None:
            kwargs["json"] = payload

        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            logger.error("API request failed: %s %s: %s", method, url, exc)
            raise ApiError(f"Network error: {exc}") from exc

        if not resp.ok:
            try:
                body = resp.json()
            except ValueError:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            message = message or f"HTTP error: {resp.status_code}"
            logger.error("API request failed: %s %s -> %s %s", method, url, resp.status_code, message)
            raise ApiError(message, status=resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(f"Invalid JSON in response: {resp.status_code}", status=resp.status_code) from exc

    async def _request(self, method: str, endpoint: str, payload: Optional[Dict[str, Any]] = None):
        return await asyncio.to_thread(self._send, method, endpoint, payload)

    async def get_all_tasks(self) -> List[Task]:
        data = await self._request("GET", "/tasks")
        return _to_tasks(data)

    async def get_tasks_by_date(self, date: str) -> List[Task]:
        data = await self._request("GET", f"/tasks/date/{_segment(date)}")
        return _to_tasks(data)

    async def create_task(self, text: str, date: str, completed: bool = False) -> Task:
        data = await self._request("POST", "/tasks", {"text": text, "completed": completed, "date": date})
        return _to_task(data)

    async def update_task(self, task_id: str, **updates) -> Task:
        data = await self._request("PUT", f"/tasks/{_segment(task_id)}", pick_updates(updates))
        return _to_task(data)

    async def toggle_task(self, task_id: str) -> Task:
        data = await self._request("PATCH", f"/tasks/{_segment(task_id)}/toggle")
        return _to_task(data)

    async def delete_task(self, task_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/tasks/{_segment(task_id)}")

    async def health_check(self) -> Dict[str, str]:
        return await self._request("GET", "/health")

    def close(self) -> None:
        self.session.close()
