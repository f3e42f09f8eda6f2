"""SQLite adapter module - Local database storage implementation."""

from taskhub.adapters.sqlite.connection import DatabaseConnection, get_connection
from taskhub.adapters.sqlite.label_repository import SqliteLabelRepository
from taskhub.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "SqliteTaskRepository",
    "SqliteLabelRepository",
    "DatabaseConnection",
    "get_connection",
]
