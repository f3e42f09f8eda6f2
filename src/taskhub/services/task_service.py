"""Task service - Business logic for task operations.

This service layer sits between commands and repositories. It owns the
create and partial-update rules for tasks and the best-effort batch update.
Every mutating call runs in a single repository transaction.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from taskhub.exceptions import TaskHubError, TaskNotFoundError
from taskhub.models import (
    BatchItemOutcome,
    BatchUpdateItem,
    Label,
    Page,
    PageRequest,
    Priority,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
)
from taskhub.repositories import LabelRepository, TaskRepository
from taskhub.services.task_filters import TaskFilterResolver

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task business logic.

    Invalid input is recovered rather than rejected where possible:
    an unrecognised priority falls back to medium on create and is ignored
    on update, and label IDs that do not exist are dropped.
    """

    def __init__(
        self, task_repository: TaskRepository, label_repository: LabelRepository
    ):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
            label_repository: LabelRepository used to resolve label IDs
        """
        self.repository = task_repository
        self.label_repository = label_repository
        self.filters = TaskFilterResolver(task_repository)

    async def list_tasks(
        self, filters: TaskFilters, page_request: PageRequest | None = None
    ) -> Page[Task]:
        """List tasks matching the highest-precedence filter present.

        Args:
            filters: Filter criteria
            page_request: Paging and sorting; defaults to the first page

        Returns:
            Page of Task objects
        """
        return await self.filters.resolve(filters, page_request or PageRequest())

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task by ID.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        task = await self.repository.get_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return task

    async def create_task(self, data: TaskCreate) -> Task:
        """Create a new task.

        Args:
            data: Task details; priority and labels are resolved leniently

        Returns:
            The persisted Task with its generated ID and timestamps
        """
        task = Task(
            title=data.title,
            description=data.description,
            due_date=data.due_date,
            priority=Priority.parse(data.priority) or Priority.MEDIUM,
            completed=data.completed if data.completed is not None else False,
        )

        with self.repository.transaction():
            if data.labels:
                task.labels = await self._resolve_labels(data.labels)
            created = await self.repository.save(task)

        logger.info("created task %s", created.id)
        return created

    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        """Apply a partial update to a task.

        Only fields present in ``updates`` are changed. A present but
        unrecognised priority leaves the current priority in place. Present
        labels, even an empty list, replace the whole label set.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        changes = updates.provided()

        with self.repository.transaction():
            task = await self.get_task(task_id)

            for field in ("title", "description", "due_date", "completed"):
                if field in changes:
                    setattr(task, field, changes[field])

            if "priority" in changes:
                priority = Priority.parse(changes["priority"])
                if priority is not None:
                    task.priority = priority
                else:
                    logger.debug(
                        "keeping priority of task %s, got %r", task_id, changes["priority"]
                    )

            if "labels" in changes:
                task.labels = await self._resolve_labels(changes["labels"])

            updated = await self.repository.save(task)

        logger.info("updated task %s (%s)", task_id, ", ".join(sorted(changes)) or "no changes")
        return updated

    async def toggle_task(self, task_id: str) -> Task:
        """Flip the completion status of a task.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        with self.repository.transaction():
            task = await self.get_task(task_id)
            task.completed = not task.completed
            return await self.repository.save(task)

    async def delete_task(self, task_id: str) -> None:
        """Delete a task. Its labels are not affected.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        with self.repository.transaction():
            task = await self.get_task(task_id)
            await self.repository.delete(task)
        logger.info("deleted task %s", task_id)

    async def batch_update_outcomes(
        self, items: Iterable[BatchUpdateItem]
    ) -> list[BatchItemOutcome]:
        """Apply each update independently and report per-item outcomes.

        Each item runs in its own transaction, so a failed item never undoes
        the ones before it. Domain errors (such as a missing task) are
        recorded on the outcome; infrastructure errors propagate.

        Args:
            items: Ordered (id, partial update) pairs

        Returns:
            One outcome per item, in input order
        """
        outcomes = []
        for item in items:
            try:
                task = await self.update_task(item.id, item.task)
            except TaskHubError as e:
                logger.warning("batch update skipped task %s: %s", item.id, e)
                outcomes.append(BatchItemOutcome(task_id=item.id, error=str(e)))
            else:
                outcomes.append(BatchItemOutcome(task_id=item.id, task=task))
        return outcomes

    async def batch_update_tasks(self, items: Iterable[BatchUpdateItem]) -> list[Task]:
        """Update several tasks, silently skipping the ones that fail.

        Returns:
            The updated tasks, in input order, failed items omitted
        """
        outcomes = await self.batch_update_outcomes(items)
        return [outcome.task for outcome in outcomes if outcome.task is not None]

    async def _resolve_labels(self, label_ids: list[str]) -> list[Label]:
        """Look up label IDs, dropping the ones that do not exist."""
        if not label_ids:
            return []
        return await self.label_repository.find_all_by_id(label_ids)


def get_task_service() -> TaskService:
    """Factory function to get a TaskService for the configured database."""
    from taskhub.adapters.sqlite import SqliteLabelRepository, SqliteTaskRepository
    from taskhub.services.config_service import get_config_service

    db_path = get_config_service().config.db_path
    return TaskService(
        SqliteTaskRepository(db_path=db_path),
        SqliteLabelRepository(db_path=db_path),
    )
