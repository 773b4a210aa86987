"""HTTP response header analysis scanner."""

import time

from recontools.models import HeaderResult, ScanOptions, ScanTarget, SECURITY_HEADERS
from recontools.scanners.base import FetchingScanner
from recontools.scanners.registry import ScannerRegistry

# Exact lowercase header names per category, in output order
HEADER_CATEGORIES: dict[str, frozenset[str]] = {
    "security": frozenset({
        "content-security-policy",
        "content-security-policy-report-only",
        "strict-transport-security",
        "x-content-type-options",
        "x-frame-options",
        "x-xss-protection",
        "referrer-policy",
        "permissions-policy",
        "cross-origin-embedder-policy",
        "cross-origin-opener-policy",
        "cross-origin-resource-policy",
        "expect-ct",
    }),
    "caching": frozenset({
        "cache-control",
        "expires",
        "etag",
        "last-modified",
        "pragma",
        "age",
        "vary",
        "cf-cache-status",
        "x-cache",
    }),
    "cors": frozenset({
        "access-control-allow-origin",
        "access-control-allow-methods",
        "access-control-allow-headers",
        "access-control-allow-credentials",
        "access-control-expose-headers",
        "access-control-max-age",
    }),
    "compression": frozenset({
        "content-encoding",
        "transfer-encoding",
    }),
    "server": frozenset({
        "server",
        "x-powered-by",
        "x-aspnet-version",
        "x-aspnetmvc-version",
        "x-generator",
        "x-runtime",
        "via",
    }),
}

OTHER_CATEGORY = "other"


def categorize_headers(headers: dict[str, str]) -> dict[str, dict[str, str]]:
    """Group lowercase-named headers by category, dropping empty categories."""
    grouped: dict[str, dict[str, str]] = {
        category: {} for category in [*HEADER_CATEGORIES, OTHER_CATEGORY]
    }
    for name, value in headers.items():
        name = name.lower()
        category = next(
            (cat for cat, names in HEADER_CATEGORIES.items() if name in names),
            OTHER_CATEGORY,
        )
        grouped[category][name] = value
    return {category: values for category, values in grouped.items() if values}


@ScannerRegistry.register
class HeadersScanner(FetchingScanner[HeaderResult]):
    """Response header categorization and security header presence."""

    failure_prefix = "Failed to analyze headers"

    @property
    def name(self) -> str:
        return "headers"

    @property
    def description(self) -> str:
        return "HTTP response header analysis"

    def get_capabilities(self) -> list[str]:
        return [
            "Header categorization",
            "Security header presence",
        ]

    async def scan(
        self,
        target: ScanTarget,
        options: ScanOptions | None = None,
    ) -> HeaderResult:
        """Fetch the target and categorize its response headers."""
        options = options or ScanOptions()
        start_time = time.time()

        self.logger.info("headers_scan_started", target=target.url)

        content = await self._fetch(target.url, target, options)
        presence = {name: name in content.headers for name in SECURITY_HEADERS}

        result = HeaderResult(
            url=target.url,
            headers=content.headers,
            categories=categorize_headers(content.headers),
            security_headers=presence,
            missing_security_headers=[name for name, present in presence.items() if not present],
        )

        self.logger.info(
            "headers_scan_completed",
            target=target.url,
            headers=len(result.headers),
            missing_security_headers=len(result.missing_security_headers),
            duration=time.time() - start_time,
        )

        return result
