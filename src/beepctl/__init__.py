"""beepctl: command-line client for the Beeper Desktop API."""

__version__ = "0.4.0"

from beepctl.api.client import BeeperClient
from beepctl.core.aliases import is_valid_alias_name, is_valid_chat_id, resolve_alias
from beepctl.core.config import BeeperConfig, load_config, save_config
from beepctl.core.exceptions import (
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
from beepctl.core.filters import build_search_filters
from beepctl.core.timeutil import parse_future_time, parse_relative_date

__all__ = [
    # Version
    "__version__",
    # Client
    "BeeperClient",
    # Config
    "BeeperConfig",
    "load_config",
    "save_config",
    # Parsing
    "parse_relative_date",
    "parse_future_time",
    "build_search_filters",
    # Aliases
    "resolve_alias",
    "is_valid_alias_name",
    "is_valid_chat_id",
    # Exceptions
    "BeepctlError",
    "ConfigError",
    "ValidationError",
    "InvalidDateFormatError",
    "InvalidTimeFormatError",
    "InvalidDateRangeError",
    "UnknownChatError",
    "APIError",
    "APIConnectionError",
    "APIStatusError",
]
