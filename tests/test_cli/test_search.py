"""Tests for the search command."""

import json

WORK = "!work:beeper.local"


def _page(items):
    return {"items": items, "hasMore": False, "oldestCursor": None}


MESSAGE = {
    "id": "m1",
    "chatID": WORK,
    "accountID": "wa-1",
    "senderName": "Bob",
    "text": "Lunch at noon?",
    "timestamp": "2026-03-31T11:00:00.000Z",
}


class TestSearch:
    def test_query_with_results(self, run_cli, api):
        api.add("GET", "/v1/messages/search", _page([MESSAGE]))
        api.add("GET", "/v1/chats/search", _page([{"id": "!lunch", "title": "Lunch Club"}]))

        result = run_cli("search", "lunch")

        assert result.exit_code == 0
        assert "Matching Chats (1)" in result.output
        assert "Lunch Club" in result.output
        assert "Matching Messages (1)" in result.output
        assert "Lunch at noon?" in result.output
        assert f"in {WORK}" in result.output
        assert "[WhatsApp]" in result.output

    def test_filters_sent_as_params(self, run_cli, api):
        api.add("GET", "/v1/messages/search", _page([]))
        api.add("GET", "/v1/chats/search", _page([]))

        result = run_cli(
            "search", "invoice",
            "--chat", "work,family",
            "--account", "wa-1",
            "--media", "image",
            "--chat-type", "group",
            "--after", "1w ago",
            "--include-muted",
        )

        assert result.exit_code == 0
        params = api.calls("GET", "/v1/messages/search")[0].url.params
        assert params["query"] == "invoice"
        assert params.get_list("chatIDs") == [WORK, "!family:beeper.local"]
        assert params.get_list("accountIDs") == ["wa-1"]
        assert params.get_list("mediaTypes") == ["image"]
        assert params["chatType"] == "group"
        assert params["includeMuted"] == "true"
        assert "dateAfter" in params
        assert "dateBefore" not in params

    def test_filters_without_query_skip_chat_search(self, run_cli, api):
        api.add("GET", "/v1/messages/search", _page([MESSAGE]))

        result = run_cli("search", "--sender", "me")

        assert result.exit_code == 0
        assert "Matching Messages (1)" in result.output
        assert api.calls("GET", "/v1/chats/search") == []
        assert api.calls("GET", "/v1/messages/search")[0].url.params["sender"] == "me"

    def test_requires_query_or_filter(self, run_cli, api):
        result = run_cli("search")
        assert result.exit_code == 1
        assert "Provide a search query or at least one filter" in result.output
        assert api.requests == []

    def test_no_results(self, run_cli, api):
        api.add("GET", "/v1/messages/search", _page([]))
        api.add("GET", "/v1/chats/search", _page([]))

        result = run_cli("search", "zzz")

        assert result.exit_code == 0
        assert 'No results found for "zzz"' in result.output

    def test_unknown_chat_filter(self, run_cli, api):
        result = run_cli("search", "hi", "--chat", "nope")
        assert result.exit_code == 1
        assert "Invalid chat ID or alias: nope" in result.output
        assert api.requests == []

    def test_invalid_media_rejected_by_click(self, run_cli):
        result = run_cli("search", "hi", "--media", "gif")
        assert result.exit_code == 2

    def test_invalid_date(self, run_cli):
        result = run_cli("search", "hi", "--before", "soon")
        assert result.exit_code == 1
        assert "Invalid --before date" in result.output

    def test_json(self, run_cli, api):
        api.add("GET", "/v1/messages/search", _page([MESSAGE]))
        api.add("GET", "/v1/chats/search", _page([]))

        result = run_cli("search", "lunch", "--json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["chats"] == []
        assert [m["id"] for m in data["messages"]] == ["m1"]
