"""Unit tests for TaskService with mocked repositories.

These pin down how the service builds the task it hands to the repository:
priority fallback, partial-update field presence and label resolution.
"""

from __future__ import annotations

from contextlib import nullcontext
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from taskhub.exceptions import LabelNotFoundError, TaskNotFoundError
from taskhub.models import (
    BatchUpdateItem,
    Label,
    Priority,
    Task,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
)
from taskhub.services.task_service import TaskService


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _echo_saved(task: Task) -> Task:
    saved = task.model_copy(deep=True)
    if saved.id is None:
        saved.id = "new-id"
    return saved


@pytest.fixture()
def mock_repo():
    repo = MagicMock()
    repo.transaction = MagicMock(side_effect=lambda: nullcontext())
    repo.get_by_id = AsyncMock(return_value=None)
    repo.save = AsyncMock(side_effect=_echo_saved)
    repo.delete = AsyncMock()
    repo.find_all = AsyncMock()
    return repo


@pytest.fixture()
def mock_label_repo():
    repo = MagicMock()
    repo.find_all_by_id = AsyncMock(return_value=[])
    return repo


@pytest.fixture()
def service(mock_repo, mock_label_repo):
    return TaskService(mock_repo, mock_label_repo)


@pytest.fixture()
def existing_task():
    return Task(
        id="task-1",
        title="Write report",
        description="Quarterly numbers",
        due_date=datetime(2025, 4, 1, 9, 0),
        priority=Priority.HIGH,
        completed=False,
        labels=[Label(id="l1", name="work")],
    )


# ---------------------------------------------------------------------------
# create_task
# ---------------------------------------------------------------------------


class TestCreateTask:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("priority", [None, "bogus", "HIGH", ""])
    async def test_unrecognised_priority_defaults_to_medium(self, service, mock_repo, priority):
        await service.create_task(TaskCreate(title="Buy milk", priority=priority))

        saved = mock_repo.save.call_args[0][0]
        assert saved.priority is Priority.MEDIUM

    @pytest.mark.asyncio
    async def test_recognised_priority_is_kept(self, service, mock_repo):
        await service.create_task(TaskCreate(title="Buy milk", priority="low"))
        assert mock_repo.save.call_args[0][0].priority is Priority.LOW

    @pytest.mark.asyncio
    async def test_completed_defaults_to_false(self, service, mock_repo):
        await service.create_task(TaskCreate(title="Buy milk"))
        assert mock_repo.save.call_args[0][0].completed is False

    @pytest.mark.asyncio
    async def test_new_task_has_no_id(self, service, mock_repo):
        result = await service.create_task(TaskCreate(title="Buy milk"))

        assert mock_repo.save.call_args[0][0].id is None
        assert result.id == "new-id"

    @pytest.mark.asyncio
    async def test_labels_resolved_through_label_repository(
        self, service, mock_repo, mock_label_repo
    ):
        mock_label_repo.find_all_by_id.return_value = [Label(id="l1", name="work")]

        await service.create_task(TaskCreate(title="Buy milk", labels=["l1", "missing"]))

        mock_label_repo.find_all_by_id.assert_awaited_once_with(["l1", "missing"])
        assert mock_repo.save.call_args[0][0].label_ids == {"l1"}

    @pytest.mark.asyncio
    async def test_no_labels_skips_lookup(self, service, mock_label_repo):
        await service.create_task(TaskCreate(title="Buy milk", labels=[]))
        mock_label_repo.find_all_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_runs_in_transaction(self, service, mock_repo):
        await service.create_task(TaskCreate(title="Buy milk"))
        mock_repo.transaction.assert_called_once()


# ---------------------------------------------------------------------------
# update_task
# ---------------------------------------------------------------------------


class TestUpdateTask:
    @pytest.mark.asyncio
    async def test_missing_task_raises(self, service, mock_repo):
        with pytest.raises(TaskNotFoundError) as exc_info:
            await service.update_task("nope", TaskUpdate(title="x"))

        assert exc_info.value.resource_id == "nope"
        mock_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_only_present_fields_change(self, service, mock_repo, existing_task):
        mock_repo.get_by_id.return_value = existing_task

        result = await service.update_task("task-1", TaskUpdate(title="Final report"))

        assert result.title == "Final report"
        assert result.description == "Quarterly numbers"
        assert result.due_date == datetime(2025, 4, 1, 9, 0)
        assert result.priority is Priority.HIGH
        assert result.label_ids == {"l1"}

    @pytest.mark.asyncio
    async def test_bogus_priority_is_ignored(self, service, mock_repo, existing_task):
        mock_repo.get_by_id.return_value = existing_task

        result = await service.update_task("task-1", TaskUpdate(priority="bogus"))

        assert result.priority is Priority.HIGH
        mock_repo.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_valid_priority_is_applied(self, service, mock_repo, existing_task):
        mock_repo.get_by_id.return_value = existing_task
        result = await service.update_task("task-1", TaskUpdate(priority="low"))
        assert result.priority is Priority.LOW

    @pytest.mark.asyncio
    async def test_empty_labels_clear_all(
        self, service, mock_repo, mock_label_repo, existing_task
    ):
        mock_repo.get_by_id.return_value = existing_task

        result = await service.update_task("task-1", TaskUpdate(labels=[]))

        assert result.labels == []
        mock_label_repo.find_all_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_labels_replace_existing(
        self, service, mock_repo, mock_label_repo, existing_task
    ):
        mock_repo.get_by_id.return_value = existing_task
        mock_label_repo.find_all_by_id.return_value = [Label(id="l2", name="home")]

        result = await service.update_task("task-1", TaskUpdate(labels=["l2"]))

        assert result.label_ids == {"l2"}

    @pytest.mark.asyncio
    async def test_absent_labels_leave_set_untouched(
        self, service, mock_repo, mock_label_repo, existing_task
    ):
        mock_repo.get_by_id.return_value = existing_task

        result = await service.update_task("task-1", TaskUpdate(completed=True))

        assert result.completed is True
        assert result.label_ids == {"l1"}
        mock_label_repo.find_all_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_explicit_none_is_not_a_change(self, service, mock_repo, existing_task):
        mock_repo.get_by_id.return_value = existing_task

        result = await service.update_task("task-1", TaskUpdate(description=None))

        assert result.description == "Quarterly numbers"


# ---------------------------------------------------------------------------
# toggle / delete / get
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_toggle_flips_completed(service, mock_repo, existing_task):
    mock_repo.get_by_id.return_value = existing_task

    result = await service.toggle_task("task-1")

    assert result.completed is True


@pytest.mark.asyncio
async def test_toggle_missing_task_raises(service):
    with pytest.raises(TaskNotFoundError):
        await service.toggle_task("nope")


@pytest.mark.asyncio
async def test_delete_missing_task_raises(service, mock_repo):
    with pytest.raises(TaskNotFoundError):
        await service.delete_task("nope")
    mock_repo.delete.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_passes_task_to_repository(service, mock_repo, existing_task):
    mock_repo.get_by_id.return_value = existing_task

    await service.delete_task("task-1")

    mock_repo.delete.assert_awaited_once_with(existing_task)


@pytest.mark.asyncio
async def test_list_tasks_uses_default_page(service, mock_repo):
    await service.list_tasks(TaskFilters())

    page_request = mock_repo.find_all.call_args[0][0]
    assert page_request.page == 1
    assert page_request.size == 10


# ---------------------------------------------------------------------------
# batch update
# ---------------------------------------------------------------------------


class TestBatchUpdate:
    @pytest.mark.asyncio
    async def test_missing_items_are_skipped(self, service, mock_repo, existing_task):
        async def get_by_id(task_id):
            return existing_task.model_copy(deep=True) if task_id == "task-1" else None

        mock_repo.get_by_id.side_effect = get_by_id

        items = [
            BatchUpdateItem(id="task-1", task=TaskUpdate(title="A")),
            BatchUpdateItem(id="99999", task=TaskUpdate(title="B")),
        ]
        result = await service.batch_update_tasks(items)

        assert [t.title for t in result] == ["A"]

    @pytest.mark.asyncio
    async def test_outcomes_record_errors_in_order(self, service, mock_repo, existing_task):
        async def get_by_id(task_id):
            return existing_task.model_copy(deep=True) if task_id == "task-1" else None

        mock_repo.get_by_id.side_effect = get_by_id

        outcomes = await service.batch_update_outcomes(
            [
                BatchUpdateItem(id="99999", task=TaskUpdate(title="B")),
                BatchUpdateItem(id="task-1", task=TaskUpdate(title="A")),
            ]
        )

        assert [o.task_id for o in outcomes] == ["99999", "task-1"]
        assert not outcomes[0].succeeded
        assert "99999" in outcomes[0].error
        assert outcomes[1].succeeded

    @pytest.mark.asyncio
    async def test_each_item_gets_its_own_transaction(self, service, mock_repo, existing_task):
        mock_repo.get_by_id.return_value = existing_task

        await service.batch_update_tasks(
            [
                BatchUpdateItem(id="task-1", task=TaskUpdate(title="A")),
                BatchUpdateItem(id="task-1", task=TaskUpdate(title="B")),
            ]
        )

        assert mock_repo.transaction.call_count == 2

    @pytest.mark.asyncio
    async def test_domain_errors_other_than_missing_are_skipped(
        self, service, mock_repo, mock_label_repo, existing_task
    ):
        mock_repo.get_by_id.return_value = existing_task
        mock_label_repo.find_all_by_id.side_effect = LabelNotFoundError("l9")

        result = await service.batch_update_tasks(
            [BatchUpdateItem(id="task-1", task=TaskUpdate(labels=["l9"]))]
        )

        assert result == []

    @pytest.mark.asyncio
    async def test_infrastructure_errors_propagate(self, service, mock_repo, existing_task):
        mock_repo.get_by_id.return_value = existing_task
        mock_repo.save.side_effect = RuntimeError("disk full")

        with pytest.raises(RuntimeError, match="disk full"):
            await service.batch_update_tasks(
                [BatchUpdateItem(id="task-1", task=TaskUpdate(title="A"))]
            )

    @pytest.mark.asyncio
    async def test_empty_batch(self, service):
        assert await service.batch_update_tasks([]) == []
