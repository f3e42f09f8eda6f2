"""SQLite implementation of LabelRepository."""

from __future__ import annotations

import sqlite3

from taskhub.adapters.sqlite.connection import get_connection
from taskhub.adapters.sqlite.utils import generate_uuid, now_iso, placeholders, row_to_dict
from taskhub.exceptions import DuplicateLabelError, LabelNotFoundError
from taskhub.models import Label, LabelCreate
from taskhub.repositories import LabelRepository


class SqliteLabelRepository(LabelRepository):
    """SQLite implementation of label repository."""

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite label repository.

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

    async def find_all_by_id(self, label_ids: list[str]) -> list[Label]:
        """Get the labels that exist among the given IDs."""
        if not label_ids:
            return []

        unique_ids = list(dict.fromkeys(label_ids))
        cursor = self.connection.execute(
            f"SELECT * FROM labels WHERE id IN ({placeholders(len(unique_ids))}) ORDER BY name",
            unique_ids,
        )
        return [Label(**row_to_dict(row)) for row in cursor.fetchall()]

    async def list_all(self) -> list[Label]:
        """List all labels."""
        cursor = self.connection.execute("SELECT * FROM labels ORDER BY name")
        return [Label(**row_to_dict(row)) for row in cursor.fetchall()]

    async def get(self, label_id: str) -> Label:
        """Get a specific label by ID."""
        cursor = self.connection.execute("SELECT * FROM labels WHERE id = ?", (label_id,))
        row = cursor.fetchone()

        if not row:
            raise LabelNotFoundError(label_id)

        return Label(**row_to_dict(row))

    async def create(self, label_data: LabelCreate) -> Label:
        """Create a new label."""
        label_id = generate_uuid()

        try:
            self.connection.execute(
                """INSERT INTO labels (id, name, color, created_at)
                   VALUES (?, ?, ?, ?)""",
                (label_id, label_data.name, label_data.color, now_iso()),
            )
            self.connection.commit()
        except sqlite3.IntegrityError as e:
            self.connection.rollback()
            if "UNIQUE constraint" in str(e):
                raise DuplicateLabelError(label_data.name) from e
            raise

        return await self.get(label_id)
