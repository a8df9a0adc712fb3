"""Error handling for Typer commands."""

import logging
from collections.abc import Callable
from datetime import date
from functools import wraps
from typing import Any, TypeVar

import typer

from ledgerkit.cli.formatters import print_error
from ledgerkit.exceptions import LedgerError, ParseError
from ledgerkit.journal.convert import parse_date

logger = logging.getLogger(__name__)

T = TypeVar("T")


def ledger_command(f: Callable[..., T]) -> Callable[..., T]:
    """Decorator turning ledger errors into a clean message and exit code 1.

    Usage:
        @app.command()
        @ledger_command
        def my_command(ctx: typer.Context):
            service = get_service(ctx.obj)
            ...
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return f(*args, **kwargs)
        except ParseError as e:
            print_error(f"Journal is malformed: {e}")
            raise typer.Exit(1) from None
        except LedgerError as e:
            print_error(str(e))
            raise typer.Exit(1) from None
        except (ValueError, OSError) as e:
            logger.debug("Command failed", exc_info=True)
            print_error(str(e))
            raise typer.Exit(1) from None

    return wrapper


def parse_date_option(value: str | None, option: str) -> date | None:
    """Parse a YYYY-MM-DD / YYYY/MM/DD option value, exiting on bad input."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError:
        print_error(f"Invalid {option} date format. Use YYYY-MM-DD or YYYY/MM/DD.")
        raise typer.Exit(1) from None
