from task_calendar.client.api_client import ApiClient

__all__ = ["ApiClient"]
