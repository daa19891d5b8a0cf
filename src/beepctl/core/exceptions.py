"""Custom exceptions for beepctl."""


class BeepctlError(Exception):
    """Base exception for beepctl."""


class ConfigError(BeepctlError):
    """Error in configuration."""


class ValidationError(BeepctlError):
    """Validation error for command parameters."""


class InvalidDateFormatError(ValidationError, ValueError):
    """Relative date string matched none of the accepted forms."""


class InvalidTimeFormatError(ValidationError, ValueError):
    """Future time string matched neither the offset grammar nor a date."""


class InvalidDateRangeError(ValidationError):
    """The --after bound is not earlier than the --before bound."""


class UnknownChatError(ValidationError):
    """Chat argument is neither a known alias nor a chat ID."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid chat ID or alias: {value}")
        self.value = value


class APIError(BeepctlError):
    """Error talking to the Beeper Desktop API."""


class APIConnectionError(APIError):
    """The API server could not be reached."""


class APIStatusError(APIError):
    """The API answered with an error status.

    Carries the HTTP status code so callers can map it to a hint
    (404 for unknown chats, 403 for missing token permissions, ...).
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
