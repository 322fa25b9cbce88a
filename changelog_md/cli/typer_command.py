import logging
from functools import wraps
from typing import Callable, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler

from changelog_md.errors import ChangelogError
from changelog_md.settings import ChangelogSettings

T = TypeVar("T", bound=Callable)
logger = logging.getLogger(__name__)


def exit_on_changelog_error(command: T) -> T:
    """Classified errors become an error log line and exit code 1, anything else propagates."""

    @wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except ChangelogError as e:
            logger.error(str(e))
            raise typer.Exit(1) from e

    return wrapper  # type: ignore


def configure_logging(
    app: typer.Typer,
    *,
    settings: ChangelogSettings | None = None,
    app_pretty_exceptions_enable: bool = False,
) -> logging.Handler:
    settings = settings or ChangelogSettings()
    handler = RichHandler(
        rich_tracebacks=False,
        level=settings.log_level,
        console=Console(stderr=True),
        show_path=False,
    )
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )
    app.pretty_exceptions_enable = app_pretty_exceptions_enable
    return handler


def set_log_level(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())
    for handler in root.handlers:
        if isinstance(handler, RichHandler):
            handler.setLevel(level.upper())
