"""HTTP client for the Beeper Desktop API."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from beepctl.core.config import DEFAULT_BASE_URL
from beepctl.core.exceptions import APIConnectionError, APIStatusError

if TYPE_CHECKING:
    from beepctl.core.config import BeeperConfig

logger = logging.getLogger(__name__)

API_PREFIX = "/v1"


def _segment(value: str) -> str:
    """Percent-encode an identifier for use as one path segment."""
    return quote(value, safe="")


def _clean(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop unset parameters so they are not sent as empty strings."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None and v != [] and v != ""}


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict):
        for key in ("message", "error", "detail"):
            if data.get(key):
                return str(data[key])
    return response.text or response.reason_phrase


class BeeperClient:
    """Thin wrapper over the Beeper Desktop REST API.

    One instance owns one :class:`httpx.Client`. List endpoints are cursor
    paginated and returned as lazy iterators so callers can stop early.

    Args:
        base_url: API root, e.g. ``http://localhost:23373``
        token: Bearer token (optional for read-only local setups)
        timeout: Request timeout in seconds
        transport: Custom transport (``httpx.MockTransport`` in tests)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: "BeeperConfig") -> "BeeperClient":
        """Build a client from loaded configuration."""
        return cls(config.resolved_base_url, config.resolved_token)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "BeeperClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Transport
    # ------------------------------------------------------------------ #

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Mapping[str, Any] | None = None,
    ) -> Any:
        url = f"{API_PREFIX}{path}"
        logger.debug(f"{method} {url} params={_clean(params)}")

        try:
            response = self._http.request(method, url, params=_clean(params), json=json)
        except httpx.ConnectError as e:
            raise APIConnectionError(
                f"Cannot connect to Beeper Desktop API at {self.base_url}"
            ) from e
        except httpx.TimeoutException as e:
            raise APIConnectionError(
                f"Timed out talking to Beeper Desktop API at {self.base_url}"
            ) from e

        logger.debug(f"{method} {url} -> {response.status_code}")

        if response.status_code >= 400:
            raise APIStatusError(response.status_code, _error_message(response))

        if not response.content:
            return None
        return response.json()

    def _paginate(self, path: str, params: Mapping[str, Any] | None = None) -> Iterator[dict]:
        """Yield items across cursor pages until the server reports no more."""
        query = dict(params or {})
        while True:
            page = self._request("GET", path, params=query) or {}
            items = page.get("items", [])
            yield from items

            cursor = page.get("oldestCursor")
            if not items or not page.get("hasMore") or not cursor:
                return
            query["cursor"] = cursor
            query["direction"] = "before"

    # ------------------------------------------------------------------ #
    # Accounts and contacts
    # ------------------------------------------------------------------ #

    def list_accounts(self) -> list[dict]:
        """List connected messaging accounts."""
        data = self._request("GET", "/accounts")
        if isinstance(data, dict):
            return data.get("items", [])
        return data or []

    def search_contacts(self, account_id: str, query: str) -> list[dict]:
        """Search contacts on one account."""
        data = self._request(
            "GET", f"/accounts/{_segment(account_id)}/contacts", params={"query": query}
        )
        return (data or {}).get("items", [])

    # ------------------------------------------------------------------ #
    # Chats
    # ------------------------------------------------------------------ #

    def list_chats(self, account_ids: list[str] | None = None) -> Iterator[dict]:
        """Iterate chats, most recent activity first."""
        return self._paginate("/chats", {"accountIDs": account_ids})

    def search_chats(self, query: str, **params: Any) -> Iterator[dict]:
        """Iterate chats whose title or participants match *query*."""
        return self._paginate("/chats/search", {"query": query, **params})

    def get_chat(self, chat_id: str) -> dict:
        return self._request("GET", f"/chats/{_segment(chat_id)}")

    def archive_chat(self, chat_id: str, archived: bool = True) -> None:
        self._request("POST", f"/chats/{_segment(chat_id)}/archive", json={"archived": archived})

    def set_reminder(
        self,
        chat_id: str,
        remind_at_ms: int,
        dismiss_on_incoming_message: bool = False,
    ) -> None:
        """Set a reminder on a chat at *remind_at_ms* (epoch milliseconds)."""
        reminder = {
            "remindAtMs": remind_at_ms,
            "dismissOnIncomingMessage": dismiss_on_incoming_message,
        }
        self._request("POST", f"/chats/{_segment(chat_id)}/reminders", json={"reminder": reminder})

    def clear_reminder(self, chat_id: str) -> None:
        self._request("DELETE", f"/chats/{_segment(chat_id)}/reminders")

    # ------------------------------------------------------------------ #
    # Messages
    # ------------------------------------------------------------------ #

    def list_messages(self, chat_id: str) -> Iterator[dict]:
        """Iterate messages in a chat, newest first."""
        return self._paginate(f"/chats/{_segment(chat_id)}/messages")

    def search_messages(self, params: Mapping[str, Any]) -> Iterator[dict]:
        """Iterate messages matching search parameters.

        See :func:`beepctl.core.filters.build_search_filters`.
        """
        return self._paginate("/messages/search", params)

    def send_message(self, chat_id: str, text: str, reply_to: str | None = None) -> dict:
        """Send a text message. Returns the API response (pending message ID)."""
        body: dict[str, Any] = {"text": text}
        if reply_to:
            body["replyToMessageID"] = reply_to
        return self._request("POST", f"/chats/{_segment(chat_id)}/messages", json=body) or {}

    # ------------------------------------------------------------------ #
    # App
    # ------------------------------------------------------------------ #

    def download_asset(self, url: str) -> dict:
        """Ask the desktop app to fetch an ``mxc://`` asset to local disk."""
        return self._request("POST", "/assets/download", json={"url": url}) or {}

    def focus(
        self,
        chat_id: str | None = None,
        message_id: str | None = None,
        draft_text: str | None = None,
        draft_attachment_path: str | None = None,
    ) -> dict:
        """Bring Beeper Desktop to the foreground, optionally opening a chat."""
        body = _clean(
            {
                "chatID": chat_id,
                "messageID": message_id,
                "draftText": draft_text,
                "draftAttachmentPath": draft_attachment_path,
            }
        )
        return self._request("POST", "/focus", json=body) or {}
