"""Pytest configuration and fixtures."""

from typing import Callable

import httpx
import pytest

from recontools.infrastructure.doh import DoHClient
from recontools.infrastructure.http import RelayTransport, ResilientFetcher
from recontools.models import ScanOptions, ScanTarget

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingSleep:
    """Sleep stand-in that records requested delays and returns at once."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sample_target() -> ScanTarget:
    """Sample scan target for testing."""
    return ScanTarget(url="https://example.com")


@pytest.fixture
def sample_options() -> ScanOptions:
    """Sample scan options for testing."""
    return ScanOptions(paced=False, poll_interval=0, max_polls=3)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def make_client() -> Callable[[Handler], httpx.AsyncClient]:
    """Factory for AsyncClients answering from a request handler."""

    def factory(handler: Handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def relays() -> list[RelayTransport]:
    return [
        RelayTransport("https://relay-a.test/?"),
        RelayTransport("https://relay-b.test/raw?url="),
    ]


@pytest.fixture
def make_fetcher(make_client, relays) -> Callable[[Handler], ResilientFetcher]:
    """Factory for fetchers over the two test relays."""

    def factory(handler: Handler) -> ResilientFetcher:
        return ResilientFetcher(transports=relays, client=make_client(handler))

    return factory


@pytest.fixture
def page_fetcher(make_fetcher) -> Callable[..., ResilientFetcher]:
    """Fetcher whose first relay serves a fixed page."""

    def factory(body: str = "", headers: dict[str, str] | None = None, status: int = 200):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, text=body, headers=headers or {})

        return make_fetcher(handler)

    return factory


@pytest.fixture
def make_doh(make_client) -> Callable[[Handler], DoHClient]:
    """Factory for DoH clients answering from a request handler."""

    def factory(handler: Handler) -> DoHClient:
        return DoHClient(endpoint="https://doh.test/resolve", client=make_client(handler))

    return factory
