"""Database schema definitions for the local SQLite store."""

from __future__ import annotations

# Labels table - independently owned, never cascaded from tasks
CREATE_LABELS_TABLE = """
CREATE TABLE IF NOT EXISTS labels (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL UNIQUE,
    color TEXT,
    created_at DATETIME NOT NULL
)
"""

# Tasks table - main task entity
CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT,
    due_date DATETIME,
    priority TEXT NOT NULL DEFAULT 'medium'
        CHECK (priority IN ('low', 'medium', 'high')),
    completed BOOLEAN NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
)
"""

# Task-Label junction table (many-to-many)
CREATE_TASK_LABELS_TABLE = """
CREATE TABLE IF NOT EXISTS task_labels (
    task_id TEXT NOT NULL,
    label_id TEXT NOT NULL,
    PRIMARY KEY (task_id, label_id),
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE,
    FOREIGN KEY (label_id) REFERENCES labels(id) ON DELETE CASCADE
)
"""


CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_completed ON tasks(completed)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_priority ON tasks(priority)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_created ON tasks(created_at)",
]

CREATE_TASK_LABEL_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_task_labels_label ON task_labels(label_id)",
]

# All table creation statements in order
ALL_TABLES = [
    CREATE_LABELS_TABLE,
    CREATE_TASKS_TABLE,
    CREATE_TASK_LABELS_TABLE,
]

ALL_INDEXES = CREATE_TASK_INDEXES + CREATE_TASK_LABEL_INDEXES


def initialize_schema(connection) -> None:
    """Initialize database schema with all tables and indexes.

    Args:
        connection: sqlite3.Connection object
    """
    cursor = connection.cursor()

    for create_statement in ALL_TABLES:
        cursor.execute(create_statement)

    for index_statement in ALL_INDEXES:
        cursor.execute(index_statement)

    connection.commit()
