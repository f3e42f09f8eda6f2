"""Decorators for command functions."""

import asyncio
import functools
import inspect
import time
import traceback
from collections.abc import Callable

import typer
from pydantic import ValidationError

from taskhub.exceptions import DuplicateLabelError, NotFoundError, TaskHubError
from taskhub.utils import exit_codes
from taskhub.utils.logger import get_logger
from taskhub.utils.ui.formatters import format_error


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _exit_code_for(error: Exception) -> int:
    if isinstance(error, AppError):
        return error.exit_code
    if isinstance(error, NotFoundError):
        return exit_codes.ERROR_NOT_FOUND
    if isinstance(error, DuplicateLabelError):
        return exit_codes.ERROR_CONFLICT
    if isinstance(error, ValidationError):
        return exit_codes.ERROR_INVALID_ARGS
    return exit_codes.ERROR_GENERAL


def command_wrapper(func: Callable):
    """Wrap a command with logging, async support and error-to-exit-code mapping."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if inspect.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)

            elapsed = time.monotonic() - start
            logger.info("command completed: %s (%.3fs)", cmd, elapsed)
            return result

        except (AppError, TaskHubError, ValidationError) as e:
            elapsed = time.monotonic() - start
            logger.error("command failed: %s (%.3fs) - %s", cmd, elapsed, str(e))
            format_error(str(e))
            raise typer.Exit(code=_exit_code_for(e)) from e

        except (typer.Exit, typer.Abort):
            # Re-raise Typer's own exits (like --help, explicit Exit(0) or a declined confirm)
            raise

        except Exception as e:
            elapsed = time.monotonic() - start
            logger.error(
                "command failed: %s (%.3fs) - %s\n%s",
                cmd,
                elapsed,
                str(e),
                traceback.format_exc(),
            )
            format_error(f"An unexpected error occurred: {str(e)}")
            raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

    return wrapper
