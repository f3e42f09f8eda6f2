"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from taskhub.adapters.sqlite.connection import get_connection
from taskhub.adapters.sqlite.utils import (
    escape_like,
    generate_uuid,
    now_iso,
    placeholders,
    row_to_dict,
    to_db_datetime,
)
from taskhub.exceptions import TaskNotFoundError
from taskhub.models import Label, Page, PageRequest, Priority, SortField, SortOrder, Task
from taskhub.repositories import TaskRepository

logger = logging.getLogger(__name__)

# Priority sorts by rank, not alphabetically
_SORT_COLUMNS = {
    SortField.DUE_DATE: "t.due_date",
    SortField.PRIORITY: (
        "CASE t.priority WHEN 'low' THEN 1 WHEN 'medium' THEN 2 WHEN 'high' THEN 3 END"
    ),
    SortField.CREATED_AT: "t.created_at",
}


class SqliteTaskRepository(TaskRepository):
    """SQLite implementation of task repository.

    Writes are not committed by the individual methods; they join the
    transaction opened with :meth:`transaction`.
    """

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Optional database file path. If None, uses default location.
            connection: Optional pre-opened connection (takes precedence over db_path).
        """
        self.db_path = db_path
        self._connection = connection

    @property
    def connection(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Commit on success, roll back on any exception."""
        try:
            yield
        except Exception:
            self.connection.rollback()
            logger.debug("transaction rolled back")
            raise
        else:
            self.connection.commit()

    async def get_by_id(self, task_id: str) -> Task | None:
        """Get a task by ID, or None."""
        cursor = self.connection.execute("SELECT * FROM tasks WHERE id = ?", (task_id,))
        row = cursor.fetchone()
        if not row:
            return None
        return self._row_to_task(row)

    async def save(self, task: Task) -> Task:
        """Insert a new task or overwrite an existing one."""
        now = now_iso()

        if task.id is None:
            task_id = generate_uuid()
            self.connection.execute(
                """INSERT INTO tasks (
                    id, title, description, due_date, priority, completed,
                    created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (
                    task_id,
                    task.title,
                    task.description,
                    to_db_datetime(task.due_date),
                    task.priority.value,
                    task.completed,
                    now,
                    now,
                ),
            )
        else:
            task_id = task.id
            cursor = self.connection.execute(
                """UPDATE tasks
                   SET title = ?, description = ?, due_date = ?, priority = ?,
                       completed = ?, updated_at = ?
                   WHERE id = ?""",
                (
                    task.title,
                    task.description,
                    to_db_datetime(task.due_date),
                    task.priority.value,
                    task.completed,
                    now,
                    task_id,
                ),
            )
            if cursor.rowcount == 0:
                raise TaskNotFoundError(task_id)

        self._set_task_labels(task_id, [label.id for label in task.labels])

        saved = await self.get_by_id(task_id)
        assert saved is not None
        return saved

    async def delete(self, task: Task) -> None:
        """Delete a task; its label links cascade, the labels stay."""
        self.connection.execute("DELETE FROM tasks WHERE id = ?", (task.id,))

    async def find_all(self, page: PageRequest) -> Page[Task]:
        return await self._find_page("1=1", [], page)

    async def find_by_completed(self, completed: bool, page: PageRequest) -> Page[Task]:
        return await self._find_page("t.completed = ?", [completed], page)

    async def find_by_priority(self, priority: Priority, page: PageRequest) -> Page[Task]:
        return await self._find_page("t.priority = ?", [priority.value], page)

    async def find_by_all_labels(
        self, label_ids: list[str], required_count: int, page: PageRequest
    ) -> Page[Task]:
        where = f"""t.id IN (
            SELECT tl.task_id FROM task_labels tl
            WHERE tl.label_id IN ({placeholders(len(label_ids))})
            GROUP BY tl.task_id
            HAVING COUNT(DISTINCT tl.label_id) = ?
        )"""
        return await self._find_page(where, [*label_ids, required_count], page)

    async def find_by_due_date_range(
        self, start: datetime, end: datetime, page: PageRequest
    ) -> Page[Task]:
        return await self._find_page(
            "t.due_date BETWEEN ? AND ?",
            [to_db_datetime(start), to_db_datetime(end)],
            page,
        )

    async def find_by_text_match(self, term: str, page: PageRequest) -> Page[Task]:
        pattern = f"%{escape_like(term.casefold())}%"
        where = (
            "(casefold(t.title) LIKE ? ESCAPE '\\' "
            "OR casefold(COALESCE(t.description, '')) LIKE ? ESCAPE '\\')"
        )
        return await self._find_page(where, [pattern, pattern], page)

    async def _find_page(
        self, where: str, params: list[Any], page: PageRequest
    ) -> Page[Task]:
        """Run a filtered, sorted and paginated task query."""
        cursor = self.connection.execute(
            f"SELECT COUNT(*) FROM tasks t WHERE {where}", params
        )
        total = cursor.fetchone()[0]

        direction = "ASC" if page.sort_order is SortOrder.ASC else "DESC"
        # rowid keeps ordering stable across pages when sort keys tie
        query = (
            f"SELECT t.* FROM tasks t WHERE {where} "
            f"ORDER BY {_SORT_COLUMNS[page.sort_by]} {direction}, t.rowid {direction} "
            "LIMIT ? OFFSET ?"
        )
        cursor = self.connection.execute(query, [*params, page.size, page.offset])
        tasks = [self._row_to_task(row) for row in cursor.fetchall()]

        return Page[Task].from_request(tasks, total, page)

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        task_dict = row_to_dict(row)
        task_dict["completed"] = bool(task_dict["completed"])
        task_dict["labels"] = self._get_task_labels(task_dict["id"])
        return Task(**task_dict)

    def _get_task_labels(self, task_id: str) -> list[Label]:
        """Get the labels attached to a task."""
        cursor = self.connection.execute(
            """SELECT l.* FROM labels l
               JOIN task_labels tl ON tl.label_id = l.id
               WHERE tl.task_id = ?
               ORDER BY l.name""",
            (task_id,),
        )
        return [Label(**row_to_dict(row)) for row in cursor.fetchall()]

    def _set_task_labels(self, task_id: str, label_ids: list[str]) -> None:
        """Set labels for a task (replaces existing)."""
        self.connection.execute("DELETE FROM task_labels WHERE task_id = ?", (task_id,))

        for label_id in dict.fromkeys(label_ids):
            self.connection.execute(
                "INSERT INTO task_labels (task_id, label_id) VALUES (?, ?)",
                (task_id, label_id),
            )
