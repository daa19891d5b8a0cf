"""Search filter assembly and date window checks."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from beepctl.core.aliases import resolve_alias
from beepctl.core.exceptions import InvalidDateRangeError, UnknownChatError, ValidationError
from beepctl.core.timeutil import parse_timestamp

MEDIA_TYPES = ("any", "video", "image", "link", "file")
CHAT_TYPES = ("single", "group")


def split_list_option(values: str | Iterable[str] | None) -> list[str]:
    """Flatten repeated and comma-separated option values.

    ``("a,b", " c ", "a")`` -> ``["a", "b", "c"]``
    """
    if values is None:
        return []
    if isinstance(values, str):
        values = [values]

    result: list[str] = []
    for value in values:
        for part in value.split(","):
            part = part.strip()
            if part and part not in result:
                result.append(part)
    return result


def validate_date_range(after: str | None, before: str | None) -> None:
    """Raise if both bounds are set and *after* is not earlier than *before*."""
    if after and before and parse_timestamp(after) >= parse_timestamp(before):
        raise InvalidDateRangeError("--after date must be before --before date")


def in_window(timestamp: str | None, after: str | None = None, before: str | None = None) -> bool:
    """Check whether *timestamp* falls strictly between *after* and *before*.

    Items without a timestamp, or with one that does not parse, only pass
    when no bound is set.
    """
    if not after and not before:
        return True
    if not timestamp:
        return False

    try:
        moment = parse_timestamp(timestamp)
    except ValueError:
        return False
    if after and moment <= parse_timestamp(after):
        return False
    if before and moment >= parse_timestamp(before):
        return False
    return True


def build_search_filters(
    query: str | None,
    *,
    aliases: Mapping[str, str] | None = None,
    chats: Iterable[str] = (),
    accounts: Iterable[str] = (),
    date_after: str | None = None,
    date_before: str | None = None,
    sender: str | None = None,
    media: Iterable[str] = (),
    chat_type: str | None = None,
    include_muted: bool = False,
    exclude_low_priority: bool = False,
) -> dict[str, Any]:
    """Build query parameters for the message search endpoint.

    Args:
        query: Free-text query. May be empty when other filters are set.
        aliases: Alias table used to resolve ``chats``.
        chats: Chat IDs or aliases (repeated or comma-separated).
        accounts: Account IDs (repeated or comma-separated).
        date_after: ISO timestamp lower bound.
        date_before: ISO timestamp upper bound.
        sender: ``"me"``, ``"others"`` or a user ID.
        media: Media types to require, from :data:`MEDIA_TYPES`.
        chat_type: ``"single"`` or ``"group"``.
        include_muted: Include muted chats in results.
        exclude_low_priority: Drop low-priority chats from results.

    Returns:
        Parameters with empty values omitted, keyed as the API expects.

    Raises:
        UnknownChatError: A chat token is neither an alias nor a chat ID.
        InvalidDateRangeError: ``date_after`` is not before ``date_before``.
        ValidationError: Unknown media or chat type.
    """
    params: dict[str, Any] = {}

    if query and query.strip():
        params["query"] = query.strip()

    chat_ids = []
    for token in split_list_option(chats):
        chat_id = resolve_alias(token, aliases)
        if chat_id is None:
            raise UnknownChatError(token)
        if chat_id not in chat_ids:
            chat_ids.append(chat_id)
    if chat_ids:
        params["chatIDs"] = chat_ids

    account_ids = split_list_option(accounts)
    if account_ids:
        params["accountIDs"] = account_ids

    validate_date_range(date_after, date_before)
    if date_after:
        params["dateAfter"] = date_after
    if date_before:
        params["dateBefore"] = date_before

    if sender and sender.strip():
        params["sender"] = sender.strip()

    media_types = [m.lower() for m in split_list_option(media)]
    unknown = [m for m in media_types if m not in MEDIA_TYPES]
    if unknown:
        raise ValidationError(
            f"Unknown media type: {', '.join(unknown)}. Available: {', '.join(MEDIA_TYPES)}"
        )
    if media_types:
        params["mediaTypes"] = media_types

    if chat_type:
        if chat_type not in CHAT_TYPES:
            raise ValidationError(
                f"Unknown chat type: {chat_type}. Available: {', '.join(CHAT_TYPES)}"
            )
        params["chatType"] = chat_type

    if include_muted:
        params["includeMuted"] = True
    if exclude_low_priority:
        params["excludeLowPriority"] = True

    return params
