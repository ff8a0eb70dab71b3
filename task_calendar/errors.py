"""Error taxonomy shared by the store, the HTTP layer and the API client."""

from typing import Optional


class TaskCalendarError(Exception):
    """Base class for every error raised by this package."""

    status_code = 500
    message = "Something went wrong!"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {"error": self.message}


class ValidationError(TaskCalendarError):
    status_code = 400
    message = "Text and date are required"


class TaskNotFound(TaskCalendarError):
    status_code = 404
    message = "Task not found"

    def __init__(self, task_id: Optional[str] = None):
        super().__init__()
        self.task_id = task_id


class StorageFailure(TaskCalendarError):
    """The backing store failed. The cause is chained, never sent to clients."""

    status_code = 500
    message = "Storage failure"


class RouteNotFound(TaskCalendarError):
    status_code = 404
    message = "Route not found"


class ApiError(TaskCalendarError):
    """Single failure value surfaced by ApiClient for any unsuccessful call."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
