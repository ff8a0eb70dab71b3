import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# Fields a client may change after creation; never the id.
UPDATABLE_FIELDS = ("text", "completed", "date")

_id_lock = threading.Lock()
_last_id = 0


@dataclass(frozen=True)
class Task:
    id: str
    text: str
    date: str  # YYYY-MM-DD, opaque to the store and the service
    completed: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "date": self.date,
        }
        if self.created_at is not None:
            data["created_at"] = self.created_at
        if self.updated_at is not None:
            data["updated_at"] = self.updated_at
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Task":
        return cls(
            id=str(data["id"]),
            text=data["text"],
            date=data["date"],
            completed=bool(data.get("completed", False)),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


def new_task_id() -> str:
    """Mint a time-derived id: epoch milliseconds, bumped past the last one issued."""
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return str(candidate)


def pick_updates(body: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    if not body:
        return {}
    return {field: body[field] for field in UPDATABLE_FIELDS if field in body}


def utc_timestamp() -> str:
    # Same shape as SQLite's CURRENT_TIMESTAMP
    return time.strftime("%Y-%m-%d %H:%M:%S", time.gmtime())
