import contextlib
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from task_calendar.errors import StorageFailure, TaskNotFound
from task_calendar.models.task_model import Task, new_task_id, pick_updates

logger = logging.getLogger(__name__)


class SQLiteTaskStore:
    """
    SQLite task store.

    Every public method opens its own connection and runs inside a single
    transaction, so each call is atomic to concurrent callers; SQLite's file
    locking serialises conflicting writers.

    `completed` is stored as INTEGER 0/1 and converted back to bool on read.
    Creation order is the implicit rowid, since CURRENT_TIMESTAMP only has
    second resolution.
    """

    def __init__(self, db_path: Union[str, Path] = "tasks.db") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._closed = False
        self._ensure_schema()
        logger.info("SQLiteTaskStore ready db=%s total=%s", self._db_path, self.count())

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    @contextlib.contextmanager
    def _transaction(self, operation: str) -> Iterator[sqlite3.Connection]:
        try:
            conn = self._get_conn()
        except sqlite3.Error as exc:
            logger.exception("Could not open %s for %s", self._db_path, operation)
            raise StorageFailure(f"{operation} failed") from exc
        try:
            with conn:
                yield conn
        except sqlite3.Error as exc:
            logger.exception("SQLite error during %s", operation)
            raise StorageFailure(f"{operation} failed") from exc
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self._transaction("schema setup") as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id TEXT PRIMARY KEY,
                    text TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    date TEXT NOT NULL,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

            cols = {row["name"] for row in conn.execute("PRAGMA table_info(tasks)")}
            # ALTER TABLE cannot add a column with a non-constant default.
            for name in ("created_at", "updated_at"):
                if name not in cols:
                    conn.execute(f"ALTER TABLE tasks ADD COLUMN {name} TEXT")
                    logger.info("SQLiteTaskStore migration: added column %s", name)

            conn.execute("CREATE INDEX IF NOT EXISTS idx_tasks_date ON tasks(date)")

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=str(row["id"]),
            text=row["text"],
            completed=bool(row["completed"]),
            date=row["date"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _fetch(conn: sqlite3.Connection, task_id: str) -> Optional[sqlite3.Row]:
        return conn.execute("SELECT * FROM tasks WHERE id = ?", (task_id,)).fetchone()

    # ---- public API ----

    def count(self) -> int:
        with self._transaction("count") as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM tasks").fetchone()
            return int(n)

    def list_all(self) -> List[Task]:
        with self._transaction("list_all") as conn:
            rows = conn.execute("SELECT * FROM tasks ORDER BY date DESC, rowid DESC").fetchall()
            return [self._row_to_task(r) for r in rows]

    def list_by_date(self, date: str) -> List[Task]:
        with self._transaction("list_by_date") as conn:
            rows = conn.execute(
                "SELECT * FROM tasks WHERE date = ? ORDER BY rowid DESC", (date,)
            ).fetchall()
            return [self._row_to_task(r) for r in rows]

    def create(
        self,
        *,
        text: str,
        date: str,
        completed: bool = False,
        task_id: Optional[str] = None,
    ) -> Task:
        task_id = task_id or new_task_id()
        with self._transaction("create") as conn:
            conn.execute(
                "INSERT INTO tasks (id, text, completed, date) VALUES (?, ?, ?, ?)",
                (task_id, text, 1 if completed else 0, date),
            )
            task = self._row_to_task(self._fetch(conn, task_id))
        logger.debug("Task created id=%s date=%s", task.id, task.date)
        return task

    def update(self, task_id: str, updates: Mapping[str, Any]) -> Task:
        fields = []
        params: List[Any] = []
        for name, value in pick_updates(updates).items():
            if name == "completed":
                value = 1 if value else 0
            fields.append(f"{name} = ?")
            params.append(value)

        fields.append("updated_at = CURRENT_TIMESTAMP")
        params.append(task_id)

        sql = f"UPDATE tasks SET {', '.join(fields)} WHERE id = ?"
        with self._transaction("update") as conn:
            cur = conn.execute(sql, params)
            if cur.rowcount == 0:
                raise TaskNotFound(task_id)
            return self._row_to_task(self._fetch(conn, task_id))

    def delete(self, task_id: str) -> Dict[str, Any]:
        with self._transaction("delete") as conn:
            cur = conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            if cur.rowcount == 0:
                raise TaskNotFound(task_id)
        logger.debug("Task deleted id=%s", task_id)
        return {"deleted": True, "id": task_id}

    def close(self) -> None:
        """No pooled connections are held; just record the shutdown once."""
        if not self._closed:
            self._closed = True
            logger.info("SQLiteTaskStore closed db=%s", self._db_path)
