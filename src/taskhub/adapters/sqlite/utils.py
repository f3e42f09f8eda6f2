"""Utility functions for SQLite adapter."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import Any


def generate_uuid() -> str:
    """Generate a new UUID as string.

    Returns:
        UUID string (e.g., "123e4567-e89b-12d3-a456-426614174000")
    """
    return str(uuid.uuid4())


def now_iso() -> str:
    """Get current timestamp in ISO format.

    Returns:
        ISO format datetime string
    """
    return datetime.now(UTC).isoformat()


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert sqlite3.Row to dictionary.

    Args:
        row: sqlite3.Row object

    Returns:
        Dictionary with column names as keys
    """
    if row is None:
        return {}
    return dict(row)


def to_db_datetime(value: datetime | None) -> str | None:
    """Serialize a datetime for storage."""
    if value is None:
        return None
    return value.isoformat()


def escape_like(term: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so the term is matched literally.

    Args:
        term: Raw search term
        escape: Escape character used in the ESCAPE clause

    Returns:
        Term with ``%``, ``_`` and the escape character escaped
    """
    return (
        term.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )


def placeholders(count: int) -> str:
    """Return ``?, ?, ...`` for an IN clause with ``count`` parameters."""
    return ", ".join("?" for _ in range(count))
