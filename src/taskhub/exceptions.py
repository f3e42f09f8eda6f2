"""Domain exceptions for taskhub."""

from __future__ import annotations


class TaskHubError(Exception):
    """Base exception for all taskhub domain errors."""


class NotFoundError(TaskHubError):
    """Raised when a requested entity does not exist."""

    resource = "Resource"

    def __init__(self, resource_id: str):
        super().__init__(f"{self.resource} not found: {resource_id}")
        self.resource_id = resource_id


class TaskNotFoundError(NotFoundError):
    """Raised when no task exists for the given ID."""

    resource = "Task"


class LabelNotFoundError(NotFoundError):
    """Raised when no label exists for the given ID."""

    resource = "Label"


class DuplicateLabelError(TaskHubError):
    """Raised when creating a label whose name is already taken."""

    def __init__(self, name: str):
        super().__init__(f"Label '{name}' already exists")
        self.name = name
