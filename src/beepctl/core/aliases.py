"""Chat alias resolution and validation."""

from __future__ import annotations

import re
from collections.abc import Mapping

_ALIAS_NAME_RE = re.compile(r"[A-Za-z0-9_]+")

CHAT_ID_PREFIX = "!"


def resolve_alias(value: str, aliases: Mapping[str, str] | None) -> str | None:
    """Resolve an alias or chat ID to a chat ID.

    Lookup order:
    1. Exact alias name in *aliases*
    2. Value that already looks like a chat ID (passed through)
    3. ``None`` - the caller decides whether that is fatal
    """
    if aliases and aliases.get(value):
        return aliases[value]
    if value.startswith(CHAT_ID_PREFIX):
        return value
    return None


def is_valid_alias_name(name: str) -> bool:
    """Alias names are ASCII letters, digits and underscores only."""
    return _ALIAS_NAME_RE.fullmatch(name) is not None


def is_valid_chat_id(chat_id: str) -> bool:
    """Shallow check: chat IDs start with ``!``."""
    return chat_id.startswith(CHAT_ID_PREFIX)
