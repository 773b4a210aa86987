"""Infrastructure layer."""

from recontools.infrastructure.http import (
    HTTPClient,
    ResilientFetcher,
    RelayTransport,
    DirectTransport,
)
from recontools.infrastructure.doh import DoHClient
from recontools.infrastructure.polling import poll_attempts

__all__ = [
    "HTTPClient",
    "ResilientFetcher",
    "RelayTransport",
    "DirectTransport",
    "DoHClient",
    "poll_attempts",
]
