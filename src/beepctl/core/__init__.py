"""Core parsing, alias and configuration logic for beepctl."""

from .aliases import is_valid_alias_name, is_valid_chat_id, resolve_alias
from .exceptions import (
    APIConnectionError,
    APIError,
    APIStatusError,
    BeepctlError,
    ConfigError,
    InvalidDateFormatError,
    InvalidDateRangeError,
    InvalidTimeFormatError,
    UnknownChatError,
    ValidationError,
)
from .timeutil import parse_future_time, parse_relative_date

__all__ = [
    # Exceptions
    "APIConnectionError",
    "APIError",
    "APIStatusError",
    "BeepctlError",
    "ConfigError",
    "InvalidDateFormatError",
    "InvalidDateRangeError",
    "InvalidTimeFormatError",
    "UnknownChatError",
    "ValidationError",
    # Parsing
    "parse_relative_date",
    "parse_future_time",
    # Aliases
    "resolve_alias",
    "is_valid_alias_name",
    "is_valid_chat_id",
]
