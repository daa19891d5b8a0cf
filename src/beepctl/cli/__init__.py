"""Command-line interface for beepctl."""
