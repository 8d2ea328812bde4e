"""Tests for the GitHub repository fetcher."""

from __future__ import annotations

import json
from urllib.error import HTTPError, URLError

import pytest

from readmegen.config import GitHubConfig
from readmegen.github.fetcher import (
    DEFAULT_DESCRIPTION,
    DEFAULT_LANGUAGE,
    DEFAULT_LICENSE,
    RepositoryFetcher,
    RepositoryForbidden,
    RepositoryNotFound,
    RepositoryUpstreamError,
    normalize_repository,
)
from readmegen.stores import RepositoryCache
from tests._fixtures.stubs import FakeClock


class FakeResponse:
    def __init__(self, payload: object) -> None:
        self._payload = payload

    def read(self) -> bytes:
        if isinstance(self._payload, bytes):
            return self._payload
        return json.dumps(self._payload).encode("utf-8")

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        return False


FULL_PAYLOAD = {
    "name": "widget",
    "full_name": "acme/widget",
    "description": "A widget",
    "language": "Go",
    "stargazers_count": 10,
    "forks_count": 3,
    "topics": ["cli", "tools"],
    "license": {"name": "MIT License"},
    "homepage": "https://widget.example",
    "default_branch": "trunk",
}


def _install_urlopen(monkeypatch, handler) -> dict:
    captured: dict = {"calls": 0}

    def fake_urlopen(request, timeout=None):
        captured["calls"] += 1
        captured["url"] = request.full_url
        captured["headers"] = {k.lower(): v for k, v in request.header_items()}
        captured["timeout"] = timeout
        return handler(request)

    monkeypatch.setattr("readmegen.github.fetcher.urlopen", fake_urlopen)
    return captured


def _http_error(code: int):
    def handler(request):
        raise HTTPError(request.full_url, code, "error", {}, None)

    return handler


def test_fetch_sends_expected_request(monkeypatch) -> None:
    captured = _install_urlopen(monkeypatch, lambda request: FakeResponse(FULL_PAYLOAD))
    fetcher = RepositoryFetcher(GitHubConfig(token="secret-token", request_timeout=5.0))

    metadata = fetcher.fetch("acme", "widget")

    assert captured["url"] == "https://api.github.com/repos/acme/widget"
    headers = captured["headers"]
    assert headers["accept"] == "application/vnd.github.v3+json"
    assert headers["user-agent"] == "README-Generator"
    assert headers["authorization"] == "Bearer secret-token"
    assert captured["timeout"] == 5.0
    assert metadata.name == "widget"
    assert metadata.topics == ("cli", "tools")
    assert metadata.license == "MIT License"
    assert metadata.homepage == "https://widget.example"
    assert metadata.default_branch == "trunk"


def test_fetch_without_token_is_unauthenticated(monkeypatch) -> None:
    captured = _install_urlopen(monkeypatch, lambda request: FakeResponse(FULL_PAYLOAD))

    RepositoryFetcher(GitHubConfig()).fetch("acme", "widget")

    assert "authorization" not in captured["headers"]


@pytest.mark.parametrize(
    ("status", "error_type"),
    [
        (404, RepositoryNotFound),
        (403, RepositoryForbidden),
        (500, RepositoryUpstreamError),
        (422, RepositoryUpstreamError),
    ],
)
def test_fetch_maps_http_status(monkeypatch, status: int, error_type: type) -> None:
    _install_urlopen(monkeypatch, _http_error(status))

    with pytest.raises(error_type):
        RepositoryFetcher(GitHubConfig()).fetch("acme", "widget")


def test_fetch_maps_transport_failure(monkeypatch) -> None:
    def handler(request):
        raise URLError("connection refused")

    _install_urlopen(monkeypatch, handler)

    with pytest.raises(RepositoryUpstreamError):
        RepositoryFetcher(GitHubConfig()).fetch("acme", "widget")


def test_fetch_rejects_invalid_json(monkeypatch) -> None:
    _install_urlopen(monkeypatch, lambda request: FakeResponse(b"<html>"))

    with pytest.raises(RepositoryUpstreamError):
        RepositoryFetcher(GitHubConfig()).fetch("acme", "widget")


def test_normalize_applies_defaults_for_missing_fields() -> None:
    payload = {
        "name": "widget",
        "description": None,
        "language": None,
        "stargazers_count": None,
        "topics": None,
        "license": None,
        "homepage": "",
    }

    metadata = normalize_repository(payload, owner="acme", repo="widget")

    assert metadata.full_name == "acme/widget"
    assert metadata.description == DEFAULT_DESCRIPTION
    assert metadata.primary_language == DEFAULT_LANGUAGE
    assert metadata.star_count == 0
    assert metadata.fork_count == 0
    assert metadata.topics == ()
    assert metadata.license == DEFAULT_LICENSE
    assert metadata.homepage is None
    assert metadata.default_branch == "main"


def test_cached_result_matches_fresh_result(monkeypatch) -> None:
    captured = _install_urlopen(monkeypatch, lambda request: FakeResponse(FULL_PAYLOAD))
    clock = FakeClock()
    fetcher = RepositoryFetcher(GitHubConfig(), cache=RepositoryCache(clock=clock))

    first = fetcher.fetch("acme", "widget")
    second = fetcher.fetch("ACME", "Widget")

    assert captured["calls"] == 1
    assert second == first


def test_cache_entry_expires_after_ttl(monkeypatch) -> None:
    captured = _install_urlopen(monkeypatch, lambda request: FakeResponse(FULL_PAYLOAD))
    clock = FakeClock()
    fetcher = RepositoryFetcher(GitHubConfig(), cache=RepositoryCache(clock=clock))

    fetcher.fetch("acme", "widget")
    clock.advance(minutes=61)
    fetcher.fetch("acme", "widget")

    assert captured["calls"] == 2


def test_failed_fetch_is_not_cached(monkeypatch) -> None:
    captured = _install_urlopen(monkeypatch, _http_error(404))
    cache = RepositoryCache(clock=FakeClock())
    fetcher = RepositoryFetcher(GitHubConfig(), cache=cache)

    for _ in range(2):
        with pytest.raises(RepositoryNotFound):
            fetcher.fetch("acme", "missing")

    assert captured["calls"] == 2
    assert len(cache) == 0
