"""Task and label data models."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class Priority(str, Enum):
    """Task priority levels, lowest first."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: str | None) -> Priority | None:
        """Parse a raw priority string.

        Matching is exact against the enum values. Unrecognised input yields
        None rather than raising, so each caller picks its own fallback.

        Args:
            value: Raw priority string (e.g. "high")

        Returns:
            The matching Priority, or None when the value is not recognised
        """
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def rank(self) -> int:
        """Sort rank, 1 for low through 3 for high."""
        return _PRIORITY_RANKS[self]


_PRIORITY_RANKS = {Priority.LOW: 1, Priority.MEDIUM: 2, Priority.HIGH: 3}


class Label(BaseModel):
    """Label model representing a reusable task tag.

    Attributes:
        id: Unique identifier for the label
        name: Label name (e.g., "Bug", "@home")
        color: Free-form color, hex code or name
    """

    id: str
    name: str
    color: str | None = None


class LabelCreate(BaseModel):
    """Model for creating a new label.

    Attributes:
        name: Label name (required)
        color: Optional color
    """

    name: str = Field(min_length=1)
    color: str | None = None


class Task(BaseModel):
    """Task model representing a complete task entity.

    A task without an ID has not been persisted yet; the store assigns the
    ID and both timestamps on first save.

    Attributes:
        id: Unique identifier for the task
        title: Short task title
        description: Optional detailed description
        due_date: Optional due date
        priority: Priority level, medium unless told otherwise
        completed: Completion status
        labels: Labels attached to the task, unique by ID
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    id: str | None = None
    title: str
    description: str | None = None
    due_date: datetime | None = None
    priority: Priority = Priority.MEDIUM
    completed: bool = False
    labels: list[Label] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("labels")
    @classmethod
    def _unique_labels(cls, labels: list[Label]) -> list[Label]:
        seen: dict[str, Label] = {}
        for label in labels:
            seen.setdefault(label.id, label)
        return list(seen.values())

    @property
    def label_ids(self) -> set[str]:
        """IDs of the attached labels."""
        return {label.id for label in self.labels}


class TaskCreate(BaseModel):
    """Model for creating a new task.

    Priority is kept as the raw string so that unrecognised values can be
    recovered by the service instead of being rejected here.

    Attributes:
        title: Task title (required)
        description: Optional detailed description
        due_date: Optional due date
        priority: Raw priority string ("low", "medium", "high")
        completed: Initial completion status
        labels: Label IDs to attach
    """

    title: str = Field(min_length=1)
    description: str | None = None
    due_date: datetime | None = None
    priority: str | None = None
    completed: bool | None = None
    labels: list[str] | None = None


class TaskUpdate(BaseModel):
    """Model for a partial update of an existing task.

    All fields are optional. A field counts as provided only when it was
    explicitly set to a non-null value, so ``labels=[]`` clears the label set
    while omitting ``labels`` leaves it untouched.

    Attributes:
        title: New title
        description: New description
        due_date: New due date
        priority: Raw priority string; unrecognised values are ignored
        completed: New completion status
        labels: Label IDs replacing the current set
    """

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    due_date: datetime | None = None
    priority: str | None = None
    completed: bool | None = None
    labels: list[str] | None = None

    def provided(self) -> dict[str, Any]:
        """Return the explicitly provided, non-null fields."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class TaskFilters(BaseModel):
    """Filter criteria for listing tasks.

    Only one criterion is applied per query; see
    ``taskhub.services.task_filters`` for the precedence order.

    Attributes:
        status: "all", "active" or "completed"
        priority: Raw priority string
        label_ids: Tasks must carry every one of these labels
        start_date: Start of the due-date range (inclusive)
        end_date: End of the due-date range (inclusive)
        search: Case-insensitive text matched against title and description
    """

    status: str | None = None
    priority: str | None = None
    label_ids: list[str] | None = None
    start_date: date | None = None
    end_date: date | None = None
    search: str | None = None


class BatchUpdateItem(BaseModel):
    """A single entry of a batch update request.

    Numeric IDs (``{"id": 99999}``) are accepted and read as strings.
    """

    id: str = Field(coerce_numbers_to_str=True)
    task: TaskUpdate


class BatchUpdateRequest(BaseModel):
    """Batch update request: an ordered list of partial updates."""

    updates: list[BatchUpdateItem] = Field(default_factory=list)


class BatchItemOutcome(BaseModel):
    """Result of applying one batch item."""

    task_id: str
    task: Task | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.task is not None


class BatchUpdateResponse(BaseModel):
    """Tasks that were updated by a batch request."""

    tasks: list[Task]
    updated_count: int
