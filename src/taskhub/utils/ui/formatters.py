"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table

from taskhub.utils.ui.console import get_console

console = get_console()

PRIORITY_STYLES = {
    "high": "bold red",
    "medium": "yellow",
    "low": "green",
}


def format_output(data: Any, output_format: str | None = None) -> None:
    """Format and display output based on format.

    ``data`` is expected to be JSON-compatible (``model_dump(mode="json")``).
    Without an explicit format the configured ``output_format`` is used.
    """
    if output_format is None:
        from taskhub.services.config_service import get_config_service

        output_format = get_config_service().config.output_format

    if output_format == "json":
        print(json.dumps(data, indent=2, default=str))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, list):
        format_dict_table(data)
    elif isinstance(data, dict) and "tasks" in data:
        format_tasks_table(data["tasks"])
        if "total" in data and "page" in data:
            console.print(
                f"[dim]Page {data['page']} · {len(data['tasks'])} of {data['total']} task(s)[/dim]"
            )
        elif "updated_count" in data:
            console.print(f"[dim]{data['updated_count']} task(s) updated[/dim]")
    elif isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_tasks_table(tasks: list[dict]) -> None:
    """Format a list of task dictionaries as a table."""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Priority")
    table.add_column("Done")
    table.add_column("Due")
    table.add_column("Labels")

    for task in tasks:
        priority = task.get("priority") or "medium"
        table.add_row(
            task.get("id") or "-",
            task.get("title", ""),
            f"[{PRIORITY_STYLES.get(priority, 'white')}]{priority}[/]",
            "✓" if task.get("completed") else "✗",
            _format_value(task.get("due_date")),
            ", ".join(label["name"] for label in task.get("labels", [])) or "-",
        )

    console.print(table)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())

    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(_format_value(item.get(col)) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        if key == "labels" and isinstance(value, list):
            value = [label.get("name", label) for label in value]
        table.add_row(key.replace("_", " ").title(), _format_value(value))

    console.print(table)


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value) or "-"
    if value is None:
        return "-"
    return str(value)


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")
