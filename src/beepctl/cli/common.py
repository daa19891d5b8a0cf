"""Shared helpers for CLI commands: output, chat/date arguments, errors."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, NoReturn, Optional, TypeVar

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from beepctl.core.aliases import is_valid_chat_id, resolve_alias
from beepctl.core.exceptions import (
    APIConnectionError,
    APIStatusError,
    BeepctlError,
    InvalidDateFormatError,
    InvalidDateRangeError,
)
from beepctl.core.filters import validate_date_range
from beepctl.core.timeutil import parse_relative_date, parse_timestamp

console = Console()
err_console = Console(stderr=True)

SEPARATOR = "[dim]" + "─" * 50 + "[/dim]"
THIN_SEP = "[dim]" + "┄" * 40 + "[/dim]"

DATE_EXAMPLES = "Examples: '1d ago', '2h ago', 'yesterday', 'today'"

T = TypeVar("T")


@dataclass(frozen=True)
class ErrorHint:
    """Message (and optional hint) shown for an API status code."""

    status: int
    message: str
    hint: Optional[str] = None


ERROR_HINTS: tuple[ErrorHint, ...] = (
    ErrorHint(401, "Authentication failed", "Set a token with: beepctl auth set <token>"),
    ErrorHint(403, "Permission denied", "Check your token has the required permissions."),
    ErrorHint(404, "Resource not found", "Make sure the ID is correct."),
)


def fail(message: str, *hints: str) -> NoReturn:
    """Print an error with dim hint lines and exit with status 1."""
    err_console.print(f"[red]{escape(message)}[/red]")
    for hint in hints:
        err_console.print(f"[dim]   {escape(hint)}[/dim]")
    raise SystemExit(1)


@contextmanager
def api_errors(*overrides: ErrorHint) -> Iterator[None]:
    """Turn beepctl errors raised inside the block into a clean CLI exit.

    *overrides* take precedence over :data:`ERROR_HINTS` for matching
    status codes, e.g. ``ErrorHint(404, "Chat not found")``.
    """
    try:
        yield
    except APIConnectionError as e:
        fail(
            "Cannot connect to Beeper Desktop API",
            str(e),
            "Make sure Beeper Desktop is running with API enabled.",
            "Settings -> Developers -> Enable Beeper Desktop API",
        )
    except APIStatusError as e:
        for hint in (*overrides, *ERROR_HINTS):
            if hint.status == e.status_code:
                fail(f"Error: {hint.message}", *([hint.hint] if hint.hint else []))
        fail(f"Error: {e}")
    except BeepctlError as e:
        fail(f"Error: {e}")


def resolve_chat_id_or_exit(value: str, aliases: Mapping[str, str] | None) -> str:
    """Resolve an alias or chat ID, exiting with a hint when neither."""
    resolved = resolve_alias(value, aliases)
    if resolved:
        return resolved
    if is_valid_chat_id(value):
        return value

    fail(
        f"Invalid chat ID or alias: {value}",
        "Chat IDs should start with '!' (e.g., !abc123:beeper.local)",
        f"Or add an alias: beepctl alias add {value} <chat-id>",
    )


def parse_date_or_exit(value: Optional[str], option_name: str) -> Optional[str]:
    """Parse a relative date option, exiting with examples when invalid."""
    if value is None:
        return None
    try:
        return parse_relative_date(value)
    except InvalidDateFormatError as e:
        fail(f"Invalid {option_name} date: {e}", DATE_EXAMPLES)


def validate_date_range_or_exit(after: Optional[str], before: Optional[str]) -> None:
    try:
        validate_date_range(after, before)
    except InvalidDateRangeError as e:
        fail(str(e))


def take(items: Iterable[T], limit: int) -> list[T]:
    """Collect at most *limit* items from a (lazy) iterable."""
    result: list[T] = []
    if limit <= 0:
        return result
    for item in items:
        result.append(item)
        if len(result) >= limit:
            break
    return result


def print_json(data: Any) -> None:
    """Pretty print JSON data."""
    console.print_json(data=data, default=str)


def format_size(size: int) -> str:
    """Format a byte count in human readable form."""
    if size < 1024:
        return f"{size}B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f}KB"
    return f"{size / (1024 * 1024):.1f}MB"


def format_timestamp(value: Optional[str]) -> str:
    """Render an API timestamp in local time."""
    if not value:
        return "unknown time"
    try:
        return parse_timestamp(value).astimezone().strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return value


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def highlight_query(text: str, query: str) -> Text:
    """Highlight case-insensitive matches of *query* in *text*."""
    result = Text(text)
    if query:
        result.highlight_regex(re.compile(re.escape(query), re.IGNORECASE), style="yellow")
    return result


def network_map(accounts: Iterable[Mapping[str, Any]]) -> dict[str, str]:
    """Map account IDs to their network names."""
    return {
        account["accountID"]: account.get("network") or account["accountID"]
        for account in accounts
        if account.get("accountID")
    }
