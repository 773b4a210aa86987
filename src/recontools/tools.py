"""Function-per-tool entry points.

These are the only calls a presentation layer (CLI, API, UI) needs. Each
takes its target and options explicitly; the tool to run is a plain
``Tool`` value chosen by the caller.
"""

from enum import Enum
from typing import Any, Awaitable, Callable

from pydantic import BaseModel

from recontools.infrastructure.http import ResilientFetcher
from recontools.models import (
    DetectionResult,
    DNSLookupResult,
    EmailResult,
    HeaderResult,
    RobotsResult,
    ScanOptions,
    ScanTarget,
    SubdomainScanResult,
    TechDetectionResult,
    TLSResult,
)
from recontools.scanners import (
    CMSScanner,
    DNSScanner,
    EmailScanner,
    HeadersScanner,
    RobotsScanner,
    SSLScanner,
    SubdomainScanner,
    WebTechScanner,
)


class Tool(str, Enum):
    """Available reconnaissance tools."""

    CMS = "cms"
    TECH = "tech"
    HEADERS = "headers"
    DNS = "dns"
    SUBDOMAINS = "subdomains"
    ROBOTS = "robots"
    EMAILS = "emails"
    SSL = "ssl"


async def detect_cms(
    url: str,
    options: ScanOptions | None = None,
    fetcher: ResilientFetcher | None = None,
) -> DetectionResult:
    """Best-matching CMS of a page."""
    return await CMSScanner(fetcher).scan(ScanTarget.parse(url), options)


async def detect_tech(
    url: str,
    options: ScanOptions | None = None,
    fetcher: ResilientFetcher | None = None,
) -> TechDetectionResult:
    """Technologies of a page, grouped by category."""
    return await WebTechScanner(fetcher).scan(ScanTarget.parse(url), options)


async def analyze_headers(
    url: str,
    options: ScanOptions | None = None,
    fetcher: ResilientFetcher | None = None,
) -> HeaderResult:
    """Categorized response headers of a page."""
    return await HeadersScanner(fetcher).scan(ScanTarget.parse(url), options)


async def dns_lookup(
    hostname: str,
    options: ScanOptions | None = None,
    **kwargs: Any,
) -> DNSLookupResult:
    """DNS records of a host, per record type."""
    return await DNSScanner(**kwargs).scan(ScanTarget.parse(hostname), options)


async def scan_subdomains(
    hostname: str,
    options: ScanOptions | None = None,
    **kwargs: Any,
) -> SubdomainScanResult:
    """Common subdomains of a host that resolve."""
    return await SubdomainScanner(**kwargs).scan(ScanTarget.parse(hostname), options)


async def analyze_robots(
    url: str,
    options: ScanOptions | None = None,
    fetcher: ResilientFetcher | None = None,
) -> RobotsResult:
    """Rules and sitemaps from the site's robots.txt."""
    return await RobotsScanner(fetcher).scan(ScanTarget.parse(url), options)


async def find_emails(
    url: str,
    options: ScanOptions | None = None,
    fetcher: ResilientFetcher | None = None,
) -> EmailResult:
    """Contact email addresses published on a page."""
    return await EmailScanner(fetcher).scan(ScanTarget.parse(url), options)


async def analyze_ssl_tls(
    url: str,
    options: ScanOptions | None = None,
    **kwargs: Any,
) -> TLSResult:
    """TLS grade, protocols and vulnerability flags of a host."""
    return await SSLScanner(**kwargs).scan(ScanTarget.parse(url), options)


TOOLS: dict[Tool, Callable[..., Awaitable[BaseModel]]] = {
    Tool.CMS: detect_cms,
    Tool.TECH: detect_tech,
    Tool.HEADERS: analyze_headers,
    Tool.DNS: dns_lookup,
    Tool.SUBDOMAINS: scan_subdomains,
    Tool.ROBOTS: analyze_robots,
    Tool.EMAILS: find_emails,
    Tool.SSL: analyze_ssl_tls,
}


async def run_tool(
    tool: Tool | str,
    target: str,
    options: ScanOptions | None = None,
) -> BaseModel:
    """Run ``tool`` against ``target``.

    Raises:
        ValueError: unknown tool name
        ValidationError: invalid target
        ScanError: the tool failed
    """
    return await TOOLS[Tool(tool)](target, options)
