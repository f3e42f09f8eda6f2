"""Label management commands."""

import typer

from taskhub.services.label_service import get_label_service
from taskhub.utils.ui.formatters import format_output, format_success

from .decorators import command_wrapper

app = typer.Typer(help="Label management commands", no_args_is_help=True)


@app.command("list")
@command_wrapper
async def list_labels(
    output: str | None = typer.Option(
        None, "--output", "-o", help="table, json or yaml (default: from config)"
    ),
) -> None:
    """List all labels."""
    label_service = get_label_service()
    labels = await label_service.list_labels()
    format_output([label.model_dump(mode="json") for label in labels], output)


@app.command("create")
@command_wrapper
async def create_label(
    name: str = typer.Argument(..., help="Label name"),
    color: str | None = typer.Option(None, "--color", help="Color, e.g. #FF0000 or red"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="table, json or yaml (default: from config)"
    ),
) -> None:
    """Create a new label."""
    label_service = get_label_service()
    label = await label_service.create_label(name, color=color)
    format_success(f"Label created: {label.id}")
    format_output(label.model_dump(mode="json"), output)
