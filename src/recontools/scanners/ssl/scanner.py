"""TLS configuration grading through the SSL Labs API."""

import asyncio
import time
from datetime import datetime, timezone
from typing import Any

import httpx

from recontools.core.config import get_settings
from recontools.core.exceptions import (
    ConfigError,
    MalformedResponseError,
    NetworkError,
    ReconError,
    TimeoutError,
)
from recontools.infrastructure.http import HTTPClient
from recontools.infrastructure.polling import Sleep, poll_attempts
from recontools.models import (
    CertificateSummary,
    ScanOptions,
    ScanTarget,
    TLSProtocol,
    TLSResult,
    TLSVulnerabilities,
)
from recontools.scanners.base import BaseScanner
from recontools.scanners.registry import ScannerRegistry

TERMINAL_STATUSES = {"READY", "ERROR"}

# Grader field -> TLSVulnerabilities field
VULNERABILITY_FLAGS = {
    "heartbleed": "heartbleed",
    "poodle": "poodle",
    "vulnBeast": "vuln_beast",
    "freak": "freak",
    "logjam": "logjam",
    "drownVulnerable": "drown_vulnerable",
}


def _from_millis(value: Any) -> datetime | None:
    if not isinstance(value, (int, float)):
        return None
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)


@ScannerRegistry.register
class SSLScanner(BaseScanner[TLSResult]):
    """Grade a host's TLS setup with an external grading service."""

    failure_prefix = "Failed to analyze SSL/TLS"

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        sleep: Sleep = asyncio.sleep,
        endpoint: str | None = None,
    ) -> None:
        super().__init__()
        self._client = client
        self._sleep = sleep
        self._endpoint = endpoint

    @property
    def name(self) -> str:
        return "ssl"

    @property
    def description(self) -> str:
        return "SSL/TLS configuration grading"

    def get_capabilities(self) -> list[str]:
        return [
            "Security grading",
            "Protocol support",
            "Known vulnerability flags",
            "Certificate summary",
        ]

    async def scan(
        self,
        target: ScanTarget,
        options: ScanOptions | None = None,
    ) -> TLSResult:
        """Start an assessment and poll until it is ready.

        The service reports ``ERROR`` as a terminal ConfigError; running out
        of polls is a TimeoutError; a ready report without endpoint details
        is a MalformedResponseError. All are raised wrapped in ScanError.
        """
        options = options or ScanOptions()
        settings = get_settings()
        endpoint = (self._endpoint or settings.tls_grader_endpoint).rstrip("/")
        interval = (
            options.poll_interval if options.poll_interval is not None else settings.tls_poll_interval
        )
        max_polls = options.max_polls or settings.tls_max_polls
        hostname = target.hostname
        start_time = time.time()

        self.logger.info("ssl_scan_started", target=hostname, max_polls=max_polls)

        try:
            async with HTTPClient(self._client, timeout=options.timeout_seconds) as http:
                data = await self._analyze(
                    http, endpoint, {"host": hostname, "startNew": "on", "all": "done"}
                )
                polls = 0
                if data.get("status") not in TERMINAL_STATUSES:
                    async for attempt in poll_attempts(max_polls, interval, self._sleep):
                        polls = attempt
                        data = await self._analyze(http, endpoint, {"host": hostname})
                        if data.get("status") in TERMINAL_STATUSES:
                            break
                    else:
                        raise TimeoutError(
                            "SSL scan timed out",
                            details={"polls": max_polls},
                        )

            if data.get("status") == "ERROR":
                raise ConfigError(
                    data.get("statusMessage") or "Unknown error",
                    details={"host": hostname},
                )

            result = self._build_result(target, data, polls)
        except ReconError as e:
            raise self._wrap_error(e, target) from e

        self.logger.info(
            "ssl_scan_completed",
            target=hostname,
            grade=result.grade,
            polls=polls,
            duration=time.time() - start_time,
        )

        return result

    async def _analyze(
        self,
        http: HTTPClient,
        endpoint: str,
        params: dict[str, str],
    ) -> dict[str, Any]:
        """One call to the analyze endpoint."""
        try:
            data = await http.get_json(f"{endpoint}/analyze", params=params)
        except httpx.HTTPError as e:
            raise NetworkError(f"Grading service unreachable: {e}") from e
        except ValueError as e:
            raise MalformedResponseError("Invalid response from SSL Labs API") from e

        if not isinstance(data, dict):
            raise MalformedResponseError("Invalid response from SSL Labs API")
        return data

    def _build_result(self, target: ScanTarget, data: dict[str, Any], polls: int) -> TLSResult:
        """Map a READY report to a TLSResult."""
        endpoints = data.get("endpoints") or []
        endpoint = endpoints[0] if endpoints else None
        if not isinstance(endpoint, dict) or not isinstance(endpoint.get("details"), dict):
            raise MalformedResponseError("Invalid response from SSL Labs API")

        details = endpoint["details"]
        protocols = [
            TLSProtocol(name=str(p.get("name", "")), version=str(p.get("version", "")))
            for p in details.get("protocols") or []
            if isinstance(p, dict)
        ]
        vulnerabilities = TLSVulnerabilities(
            **{field: bool(details.get(key)) for key, field in VULNERABILITY_FLAGS.items()}
        )
        certificates = [
            CertificateSummary(
                subject=cert.get("subject"),
                issuer=cert.get("issuerSubject") or cert.get("issuer"),
                valid_from=_from_millis(cert.get("notBefore")),
                valid_to=_from_millis(cert.get("notAfter")),
                key_strength=cert["keyStrength"] if isinstance(cert.get("keyStrength"), int) else None,
            )
            for cert in data.get("certs") or []
            if isinstance(cert, dict)
        ]

        return TLSResult(
            url=target.url,
            hostname=target.hostname,
            grade=endpoint.get("grade"),
            protocols=protocols,
            vulnerabilities=vulnerabilities,
            certificates=certificates,
            polls=polls,
        )
