"""HTTP client wrapper and resilient content fetcher.

Fetching goes through an ordered list of transports (relays that forward
the request and return the origin's response verbatim, or a direct
transport). The fallback policy is a small state machine:

    Trying(i) --2xx-------------------> Succeeded
    Trying(i) --non-2xx---------------> Failed(HttpError)
    Trying(i) --transport failure-----> Trying(i + 1) | Failed(NetworkError)

Only a transport that produced no response triggers fallback. A transport
that answered with an error status is reported as is.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any
from urllib.parse import quote, urlsplit

import httpx
from pydantic import BaseModel, ConfigDict, Field

from recontools.core.config import get_settings
from recontools.core.exceptions import HttpError, NetworkError
from recontools.core.logging import get_logger
from recontools.models.fetch import FetchResult


class HTTPClient:
    """Async HTTP client wrapper.

    An injected ``httpx.AsyncClient`` is used as is and left open;
    otherwise a client is created on enter and closed on exit.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self.settings = get_settings()
        self._timeout = timeout or self.settings.http_timeout
        self._external = client
        self._client: httpx.AsyncClient | None = client

    async def __aenter__(self) -> "HTTPClient":
        if self._external is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                follow_redirects=True,
                headers={"User-Agent": self.settings.user_agent},
            )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._external is None and self._client:
            await self._client.aclose()
            self._client = None

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make GET request."""
        if not self._client:
            raise RuntimeError("Client not initialized. Use async with.")
        kwargs.setdefault("timeout", self._timeout)
        return await self._client.get(url, **kwargs)

    async def get_json(self, url: str, **kwargs: Any) -> Any:
        """GET a JSON document. Non-2xx statuses raise HttpError."""
        response = await self.get(url, **kwargs)
        if not response.is_success:
            raise HttpError(response.status_code)
        return response.json()


class Transport(ABC):
    """One path for reaching a target URL."""

    name: str

    @abstractmethod
    def build_url(self, target_url: str) -> str:
        """URL to request in order to fetch ``target_url``."""
        ...


class RelayTransport(Transport):
    """Relay taking the percent-encoded target appended to its base URL."""

    def __init__(self, base_url: str, name: str | None = None) -> None:
        self.base_url = base_url
        self.name = name or urlsplit(base_url).hostname or base_url

    def build_url(self, target_url: str) -> str:
        return f"{self.base_url}{quote(target_url, safe='')}"

    def __repr__(self) -> str:
        return f"RelayTransport({self.base_url!r})"


class DirectTransport(Transport):
    """Request the target itself, without a relay."""

    name = "direct"

    def build_url(self, target_url: str) -> str:
        return target_url

    def __repr__(self) -> str:
        return "DirectTransport()"


def default_transports() -> list[Transport]:
    """Transports from settings: configured relays in order, or direct."""
    settings = get_settings()
    if settings.use_relays and settings.relay_endpoints:
        return [RelayTransport(base) for base in settings.relay_endpoints]
    return [DirectTransport()]


class FetchPhase(str, Enum):
    """State of a fetch across transports."""

    TRYING = "trying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class AttemptOutcome(str, Enum):
    """Classification of a single transport attempt."""

    RESPONDED = "responded"
    HTTP_ERROR = "http_error"
    TRANSPORT_FAILURE = "transport_failure"


class FetchState(BaseModel):
    """Immutable fetch state."""

    model_config = ConfigDict(frozen=True)

    phase: FetchPhase = FetchPhase.TRYING
    transport_index: int = 0
    status_code: int | None = None
    failures: tuple[str, ...] = Field(default_factory=tuple)


def classify_response(response: httpx.Response) -> AttemptOutcome:
    """Classify a response that did arrive."""
    return AttemptOutcome.RESPONDED if response.is_success else AttemptOutcome.HTTP_ERROR


def advance(
    state: FetchState,
    outcome: AttemptOutcome,
    transport_count: int,
    status_code: int | None = None,
    error: str | None = None,
) -> FetchState:
    """Pure transition function of the fetch state machine."""
    if state.phase is not FetchPhase.TRYING:
        raise ValueError(f"Cannot advance from terminal state {state.phase.value}")

    if outcome is AttemptOutcome.RESPONDED:
        return state.model_copy(
            update={"phase": FetchPhase.SUCCEEDED, "status_code": status_code}
        )

    if outcome is AttemptOutcome.HTTP_ERROR:
        return state.model_copy(
            update={"phase": FetchPhase.FAILED, "status_code": status_code}
        )

    failures = (*state.failures, error or "transport failure")
    next_index = state.transport_index + 1
    if next_index < transport_count:
        return FetchState(
            phase=FetchPhase.TRYING,
            transport_index=next_index,
            failures=failures,
        )
    return state.model_copy(update={"phase": FetchPhase.FAILED, "failures": failures})


class ResilientFetcher:
    """Fetch a URL's body and headers with transport fallback."""

    def __init__(
        self,
        transports: list[Transport] | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        self.transports = transports or default_transports()
        self.timeout = timeout
        self._client = client
        self.logger = get_logger("fetcher")

    async def fetch(self, url: str, timeout: float | None = None) -> FetchResult:
        """Fetch ``url``, falling back across transports on transport failure.

        Raises:
            HttpError: a transport responded with a non-2xx status
            NetworkError: every transport failed or timed out
        """
        timeout = timeout or self.timeout
        state = FetchState()
        response: httpx.Response | None = None
        transport = self.transports[0]

        async with HTTPClient(self._client, timeout=timeout) as http:
            while state.phase is FetchPhase.TRYING:
                transport = self.transports[state.transport_index]
                try:
                    response = await http.get(transport.build_url(url))
                except httpx.HTTPError as e:
                    reason = str(e) or type(e).__name__
                    error = f"{transport.name}: {reason}"
                    state = advance(
                        state,
                        AttemptOutcome.TRANSPORT_FAILURE,
                        len(self.transports),
                        error=error,
                    )
                    if state.phase is FetchPhase.TRYING:
                        self.logger.warning(
                            "relay_fallback",
                            url=url,
                            failed=transport.name,
                            next=self.transports[state.transport_index].name,
                            error=reason,
                        )
                    continue

                state = advance(
                    state,
                    classify_response(response),
                    len(self.transports),
                    status_code=response.status_code,
                )

        if state.phase is FetchPhase.FAILED:
            if state.status_code is not None:
                raise HttpError(
                    state.status_code,
                    details={"url": url, "transport": transport.name},
                )
            raise NetworkError(
                "Network error",
                details={"url": url, "failures": list(state.failures)},
            )

        assert response is not None
        return FetchResult(
            url=url,
            body=response.text,
            headers=response.headers,
            status_code=response.status_code,
            transport=transport.name,
        )
