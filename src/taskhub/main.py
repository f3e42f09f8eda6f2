"""Main entry point for taskhub."""

import typer
from rich.console import Console

from taskhub import __version__
from taskhub.commands import config_command, labels_command, tasks_command
from taskhub.services.config_service import get_config_service
from taskhub.utils.logger import get_logger

app = typer.Typer(
    name="taskhub",
    help="Task management with labels, filters and batch updates",
    no_args_is_help=True,
)

console = Console()

app.add_typer(tasks_command.app, name="tasks", help="Task management commands")
app.add_typer(labels_command.app, name="labels", help="Label management commands")
app.add_typer(config_command.app, name="config", help="Configuration management")


@app.callback()
def main_callback() -> None:
    """Apply the configured log level before any command runs."""
    get_logger().setLevel(get_config_service().config.log_level)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]taskhub[/bold] version [cyan]{__version__}[/cyan]")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
