from __future__ import annotations

import pytest

from readmegen.orchestrator import Orchestrator
from readmegen.stores import SessionStore
from tests._fixtures.stubs import FakeClock, StubClient, StubFetcher


@pytest.fixture
def clock() -> FakeClock:
    """Provide a controllable clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture
def client() -> StubClient:
    return StubClient()


@pytest.fixture
def sessions(clock: FakeClock) -> SessionStore:
    return SessionStore(clock=clock)


@pytest.fixture
def orchestrator(
    sessions: SessionStore, fetcher: StubFetcher, client: StubClient
) -> Orchestrator:
    """Orchestrator wired to stubs; no network access."""
    built = Orchestrator(sessions=sessions, fetcher=fetcher, client=client)  # type: ignore[arg-type]
    assert built.sessions is sessions
    return built
