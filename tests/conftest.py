"""Pytest configuration and fixtures."""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Union

import httpx
import pytest

from beepctl.api.client import BeeperClient

Route = Union[Any, Callable[[httpx.Request], Any]]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def clean_env():
    """Clean environment variables that might affect tests."""
    env_vars = ["BEEPER_TOKEN", "BEEPER_URL"]
    old_values = {var: os.environ.get(var) for var in env_vars}

    for var in env_vars:
        if var in os.environ:
            del os.environ[var]

    yield

    for var, value in old_values.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]


@pytest.fixture
def sample_config(temp_dir):
    """Create a sample configuration file."""
    config_file = temp_dir / "config.json"
    config_file.write_text(
        json.dumps(
            {
                "token": "tok_1234567890abcdef",
                "baseUrl": "http://localhost:23373",
                "aliases": {
                    "work": "!work:beeper.local",
                    "family": "!family:beeper.local",
                },
            },
            indent=2,
        )
    )
    return config_file


class FakeAPI:
    """In-memory Beeper Desktop API served through ``httpx.MockTransport``.

    Routes map ``(method, path)`` to a JSON body, an ``httpx.Response``, or a
    callable taking the request. Unknown routes answer 404. Every request is
    recorded in ``requests``.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Route] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, response: Route) -> None:
        self.routes[(method, path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"no route {request.url.path}"})
        if callable(route):
            route = route(request)
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, json=route)

    def client(self, config=None) -> BeeperClient:
        return BeeperClient(
            "http://beeper.test",
            token="test-token",
            transport=httpx.MockTransport(self.handler),
        )

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]


@pytest.fixture
def api():
    """Fake API with a couple of accounts registered."""
    fake = FakeAPI()
    fake.add(
        "GET",
        "/v1/accounts",
        [
            {"accountID": "wa-1", "network": "WhatsApp", "user": {"fullName": "Alice Example"}},
            {"accountID": "tg-1", "network": "Telegram", "user": {"displayText": "@alice"}},
        ],
    )
    return fake
