"""Database connection management for the local SQLite store.

This module provides a singleton connection manager so that the task and
label repositories share one connection, and therefore one transaction, per
database file.
"""

from __future__ import annotations

import atexit
import logging
import os
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from taskhub.adapters.sqlite.schema import initialize_schema

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "taskhub.db"


def default_db_path() -> Path:
    """Location of the database when none is configured."""
    return Path(user_data_dir("taskhub")) / DEFAULT_DB_NAME


class DatabaseConnection:
    """Singleton connection manager for the SQLite store.

    Provides:
    - Single connection per process (connection reuse)
    - WAL mode for better concurrency
    - Foreign key constraint enforcement
    - Automatic directory creation and schema initialisation
    - Graceful cleanup on exit
    """

    _instance: DatabaseConnection | None = None
    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None
    _atexit_registered: bool = False

    def __new__(cls) -> DatabaseConnection:
        """Ensure singleton pattern."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Get or create database connection.

        Args:
            db_path: Path to database file. If None, uses default location.

        Returns:
            sqlite3.Connection object configured for taskhub
        """
        instance = cls()

        db_path = default_db_path() if db_path is None else Path(db_path)

        if instance._connection is not None and instance._db_path == db_path:
            return instance._connection

        # Close existing connection if path changed
        if instance._connection is not None:
            instance._connection.close()

        db_path.parent.mkdir(parents=True, exist_ok=True)
        is_new_database = not db_path.exists()

        connection = open_connection(db_path)

        # Owner read/write only
        if is_new_database:
            os.chmod(db_path, 0o600)
            logger.info("created database at %s", db_path)

        instance._connection = connection
        instance._db_path = db_path

        if not cls._atexit_registered:
            atexit.register(cls.close_connection)
            cls._atexit_registered = True

        return connection

    @classmethod
    def close_connection(cls) -> None:
        """Close database connection gracefully."""
        instance = cls()
        if instance._connection is not None:
            try:
                instance._connection.close()
            finally:
                instance._connection = None
                instance._db_path = None


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


def open_connection(db_path: str | Path) -> sqlite3.Connection:
    """Open and configure a new connection with the schema applied.

    Args:
        db_path: Database file path, or ":memory:"

    Returns:
        Configured sqlite3.Connection
    """
    connection = sqlite3.connect(
        str(db_path),
        check_same_thread=False,
        timeout=30.0,  # Wait up to 30s for locks
    )
    connection.row_factory = sqlite3.Row
    # SQLite's LOWER() only folds ASCII
    connection.create_function("casefold", 1, _casefold, deterministic=True)
    connection.execute("PRAGMA foreign_keys = ON")
    connection.execute("PRAGMA journal_mode = WAL")
    initialize_schema(connection)
    return connection


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """Helper function to get database connection.

    Args:
        db_path: Optional path to database file

    Returns:
        Configured sqlite3.Connection
    """
    return DatabaseConnection.get_connection(db_path)
