"""Task management commands."""

import sys
from datetime import date, datetime
from pathlib import Path

import typer

from taskhub.models import (
    BatchUpdateRequest,
    BatchUpdateResponse,
    PageRequest,
    TaskCreate,
    TaskFilters,
    TaskUpdate,
)
from taskhub.services.config_service import get_config_service
from taskhub.services.task_service import get_task_service
from taskhub.utils.ui.formatters import format_output, format_success, format_warning

from .decorators import command_wrapper

app = typer.Typer(help="Task management commands", no_args_is_help=True)

DATE_FORMATS = ["%Y-%m-%d"]
DATETIME_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M"]


def _as_date(value: datetime | None) -> date | None:
    return value.date() if value is not None else None


@app.command("list")
@command_wrapper
async def list_tasks(
    status: str | None = typer.Option(
        None, "--status", help="Filter by status: all, active, completed"
    ),
    priority: str | None = typer.Option(
        None, "--priority", help="Filter by priority: low, medium, high"
    ),
    label: list[str] | None = typer.Option(
        None, "--label", "-l", help="Label ID the task must carry (repeatable)"
    ),
    start: datetime | None = typer.Option(
        None, "--start", formats=DATE_FORMATS, help="Due on or after (YYYY-MM-DD)"
    ),
    end: datetime | None = typer.Option(
        None, "--end", formats=DATE_FORMATS, help="Due on or before (YYYY-MM-DD)"
    ),
    search: str | None = typer.Option(None, "--search", help="Search title/description"),
    page: int = typer.Option(1, "--page", help="Page number (starting from 1)"),
    limit: int | None = typer.Option(None, "--limit", help="Tasks per page (1-100)"),
    sort_by: str = typer.Option(
        "createdAt", "--sort-by", help="Sort field: dueDate, priority, createdAt"
    ),
    sort_order: str = typer.Option("desc", "--sort-order", help="asc or desc"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="table, json or yaml (default: from config)"
    ),
) -> None:
    """List tasks.

    Only one filter is applied, in this order of precedence: status,
    priority, labels, due-date range, search.
    """
    if limit is None:
        limit = get_config_service().config.default_page_size

    page_request = PageRequest.of(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)
    filters = TaskFilters(
        status=status,
        priority=priority,
        label_ids=label,
        start_date=_as_date(start),
        end_date=_as_date(end),
        search=search,
    )

    task_service = get_task_service()
    result = await task_service.list_tasks(filters, page_request)

    format_output(
        {
            "tasks": [t.model_dump(mode="json") for t in result.content],
            "total": result.total,
            "page": result.page,
            "limit": result.size,
        },
        output,
    )


@app.command("get")
@command_wrapper
async def get_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="table, json or yaml (default: from config)"
    ),
) -> None:
    """Get task details."""
    task_service = get_task_service()
    task = await task_service.get_task(task_id)
    format_output(task.model_dump(mode="json"), output)


@app.command("create")
@command_wrapper
async def create_task(
    title: str = typer.Argument(..., help="Task title"),
    description: str | None = typer.Option(None, "--description", help="Description"),
    due: datetime | None = typer.Option(None, "--due", formats=DATETIME_FORMATS, help="Due date"),
    priority: str | None = typer.Option(
        None, "--priority", help="low, medium or high (default: medium)"
    ),
    completed: bool | None = typer.Option(
        None, "--completed/--active", help="Initial completion status"
    ),
    label: list[str] | None = typer.Option(
        None, "--label", "-l", help="Label ID to attach (repeatable)"
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="table, json or yaml (default: from config)"
    ),
) -> None:
    """Create a new task."""
    task_service = get_task_service()

    task = await task_service.create_task(
        TaskCreate(
            title=title,
            description=description,
            due_date=due,
            priority=priority,
            completed=completed,
            labels=label or None,
        )
    )
    format_success(f"Task created: {task.id}")
    format_output(task.model_dump(mode="json"), output)


@app.command("update")
@command_wrapper
async def update_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    title: str | None = typer.Option(None, "--title", help="New title"),
    description: str | None = typer.Option(None, "--description", help="New description"),
    due: datetime | None = typer.Option(
        None, "--due", formats=DATETIME_FORMATS, help="New due date"
    ),
    priority: str | None = typer.Option(None, "--priority", help="New priority"),
    completed: bool | None = typer.Option(
        None, "--completed/--active", help="New completion status"
    ),
    label: list[str] | None = typer.Option(
        None, "--label", "-l", help="Replace labels with these IDs (repeatable)"
    ),
    clear_labels: bool = typer.Option(False, "--clear-labels", help="Remove all labels"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="table, json or yaml (default: from config)"
    ),
) -> None:
    """Update only the given fields of a task."""
    fields = {
        "title": title,
        "description": description,
        "due_date": due,
        "priority": priority,
        "completed": completed,
        "labels": [] if clear_labels else (label or None),
    }
    updates = TaskUpdate(**{k: v for k, v in fields.items() if v is not None})

    task_service = get_task_service()
    task = await task_service.update_task(task_id, updates)
    format_success(f"Task updated: {task.id}")
    format_output(task.model_dump(mode="json"), output)


@app.command("toggle")
@command_wrapper
async def toggle_task(
    task_id: str = typer.Argument(..., help="Task ID"),
) -> None:
    """Flip a task between completed and active."""
    task_service = get_task_service()
    task = await task_service.toggle_task(task_id)
    state = "completed" if task.completed else "active"
    format_success(f"Task {task.id} is now {state}")


@app.command("delete")
@command_wrapper
async def delete_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task. Its labels are kept."""
    if not yes:
        typer.confirm(f"Delete task {task_id}?", abort=True)

    task_service = get_task_service()
    await task_service.delete_task(task_id)
    format_success(f"Task deleted: {task_id}")


@app.command("batch-update")
@command_wrapper
async def batch_update(
    source: str = typer.Argument(
        ..., help='JSON file with {"updates": [{"id": ..., "task": {...}}]}, or - for stdin'
    ),
    output: str | None = typer.Option(
        None, "--output", "-o", help="table, json or yaml (default: from config)"
    ),
) -> None:
    """Update several tasks at once, skipping the ones that do not exist."""
    raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    request = BatchUpdateRequest.model_validate_json(raw)

    task_service = get_task_service()
    tasks = await task_service.batch_update_tasks(request.updates)

    skipped = len(request.updates) - len(tasks)
    if skipped:
        format_warning(f"{skipped} update(s) skipped")

    response = BatchUpdateResponse(tasks=tasks, updated_count=len(tasks))
    format_output(response.model_dump(mode="json"), output)
