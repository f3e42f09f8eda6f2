"""Repository abstraction layer for taskhub.

This module defines the abstract base classes (interfaces) for the task and
label stores, following the hexagonal architecture (Ports & Adapters) pattern.

The services only ever talk to these interfaces, so the storage engine behind
them (local SQLite today) can be swapped without touching business logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime

from taskhub.models import Label, LabelCreate, Page, PageRequest, Priority, Task


class TaskRepository(ABC):
    """Abstract base class for task persistence operations.

    Every ``find_*`` query is paginated and sorted with the given
    PageRequest and returns a Page.
    """

    @abstractmethod
    def transaction(self) -> AbstractContextManager[None]:
        """Open a unit of work.

        All writes made inside the block are committed together when it exits
        normally and rolled back together when it raises.
        """
        raise NotImplementedError(
            "TaskRepository.transaction() must be implemented by adapter"
        )

    @abstractmethod
    async def get_by_id(self, task_id: str) -> Task | None:
        """Get a task by ID.

        Args:
            task_id: Unique identifier for the task

        Returns:
            Task object, or None if no task has this ID
        """
        raise NotImplementedError(
            "TaskRepository.get_by_id() must be implemented by adapter"
        )

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """Insert or update a task.

        A task without an ID is inserted and receives a generated ID and
        timestamps; otherwise the existing row is overwritten and
        ``updated_at`` refreshed. The task's label links are replaced with
        its current labels.

        Args:
            task: Task to persist

        Returns:
            The persisted Task as read back from the store
        """
        raise NotImplementedError("TaskRepository.save() must be implemented by adapter")

    @abstractmethod
    async def delete(self, task: Task) -> None:
        """Delete a task. Labels attached to it are left untouched.

        Args:
            task: Persisted task to delete
        """
        raise NotImplementedError(
            "TaskRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def find_all(self, page: PageRequest) -> Page[Task]:
        """List all tasks."""
        raise NotImplementedError(
            "TaskRepository.find_all() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_completed(self, completed: bool, page: PageRequest) -> Page[Task]:
        """List tasks with the given completion status."""
        raise NotImplementedError(
            "TaskRepository.find_by_completed() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_priority(self, priority: Priority, page: PageRequest) -> Page[Task]:
        """List tasks with the given priority."""
        raise NotImplementedError(
            "TaskRepository.find_by_priority() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_all_labels(
        self, label_ids: list[str], required_count: int, page: PageRequest
    ) -> Page[Task]:
        """List tasks linked to every one of the given labels.

        Args:
            label_ids: Label IDs to match
            required_count: Number of distinct IDs a task must match
            page: Page request

        Returns:
            Page of tasks carrying at least ``required_count`` of the labels
        """
        raise NotImplementedError(
            "TaskRepository.find_by_all_labels() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_due_date_range(
        self, start: datetime, end: datetime, page: PageRequest
    ) -> Page[Task]:
        """List tasks due between ``start`` and ``end``, both inclusive."""
        raise NotImplementedError(
            "TaskRepository.find_by_due_date_range() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_text_match(self, term: str, page: PageRequest) -> Page[Task]:
        """List tasks whose title or description contains ``term``, ignoring case."""
        raise NotImplementedError(
            "TaskRepository.find_by_text_match() must be implemented by adapter"
        )


class LabelRepository(ABC):
    """Abstract base class for label persistence operations."""

    @abstractmethod
    async def find_all_by_id(self, label_ids: list[str]) -> list[Label]:
        """Get the labels matching the given IDs.

        Unknown IDs are skipped, never reported.

        Args:
            label_ids: Label IDs to look up

        Returns:
            The labels that exist, without duplicates
        """
        raise NotImplementedError(
            "LabelRepository.find_all_by_id() must be implemented by adapter"
        )

    @abstractmethod
    async def list_all(self) -> list[Label]:
        """List all labels."""
        raise NotImplementedError(
            "LabelRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def get(self, label_id: str) -> Label:
        """Get a specific label by ID.

        Raises:
            LabelNotFoundError: If label does not exist
        """
        raise NotImplementedError("LabelRepository.get() must be implemented by adapter")

    @abstractmethod
    async def create(self, label_data: LabelCreate) -> Label:
        """Create a new label.

        Raises:
            DuplicateLabelError: If a label with this name already exists
        """
        raise NotImplementedError(
            "LabelRepository.create() must be implemented by adapter"
        )

