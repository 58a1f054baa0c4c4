"""Shared fixtures: an isolated config dir and a fake checking endpoint."""

import json

import httpx
import pytest

from updatecheck.config import DISABLE_ENV, URL_ENV


@pytest.fixture(autouse=True)
def config_home(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at a temp dir and clear updatecheck env vars."""
    home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home))
    monkeypatch.delenv(DISABLE_ENV, raising=False)
    monkeypatch.delenv(URL_ENV, raising=False)
    return home


class FakeEndpoint:
    """Records every request and answers with a canned status and body."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else {"updateRequired": False, "message": ""}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, content=json.dumps(self.body))
        return httpx.Response(self.status_code, content=self.body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))

    @property
    def calls(self) -> int:
        return len(self.requests)


@pytest.fixture
def endpoint():
    return FakeEndpoint()
