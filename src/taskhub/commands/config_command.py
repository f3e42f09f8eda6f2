"""Configuration commands."""

import typer

from taskhub.services.config_service import get_config_service
from taskhub.utils import exit_codes
from taskhub.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management", no_args_is_help=True)


@app.command("get")
@command_wrapper
def get_config(
    key: str | None = typer.Argument(None, help="Config key (omit to show all)"),
    output: str | None = typer.Option(
        None, "--output", "-o", help="table, json or yaml (default: from config)"
    ),
) -> None:
    """Show configuration values."""
    config_service = get_config_service()
    if key is None:
        format_output(config_service.config.model_dump(mode="json"), output)
        return
    format_output({key: config_service.get(key)}, output)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Config key"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a configuration value."""
    config_service = get_config_service()
    try:
        config_service.set(key, value)
    except KeyError as e:
        raise AppError(f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS) from e
    except ValueError as e:
        raise AppError(str(e), exit_codes.ERROR_INVALID_ARGS) from e
    format_success(f"{key} = {config_service.get(key)}")
