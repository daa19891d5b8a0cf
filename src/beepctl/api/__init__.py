"""Beeper Desktop API client."""

from beepctl.api.client import BeeperClient

__all__ = ["BeeperClient"]
