"""robots.txt discovery scanner."""

import time
from urllib.parse import urljoin

from recontools.models import RobotsResult, RobotsRule, ScanOptions, ScanTarget
from recontools.scanners.base import FetchingScanner
from recontools.scanners.registry import ScannerRegistry


def parse_robots_txt(content: str, url: str) -> RobotsResult:
    """Parse robots.txt directives.

    Directive keywords are case-insensitive; values are kept verbatim
    (trimmed). Rules take the most recent ``User-agent`` (``*`` before
    any), sitemaps are collected independently of user agents.
    """
    current_agent = "*"
    user_agents: list[str] = []
    rules: list[RobotsRule] = []
    sitemaps: list[str] = []
    crawl_delay: float | None = None

    for line in content.splitlines():
        line = line.strip()

        # Skip comments and empty lines
        if not line or line.startswith("#") or ":" not in line:
            continue

        key, value = line.split(":", 1)
        key = key.strip().lower()
        value = value.strip()

        if key == "user-agent":
            current_agent = value
            if value not in user_agents:
                user_agents.append(value)

        elif key in ("allow", "disallow"):
            rules.append(RobotsRule(user_agent=current_agent, type=key, path=value))

        elif key == "sitemap":
            sitemaps.append(value)

        elif key == "crawl-delay" and crawl_delay is None:
            try:
                crawl_delay = float(value)
            except ValueError:
                pass

    return RobotsResult(
        url=url,
        rules=rules,
        sitemaps=sitemaps,
        user_agents=user_agents,
        crawl_delay=crawl_delay,
    )


@ScannerRegistry.register
class RobotsScanner(FetchingScanner[RobotsResult]):
    """Fetch and parse the target's robots.txt."""

    failure_prefix = "Failed to analyze robots.txt"

    @property
    def name(self) -> str:
        return "robots"

    @property
    def description(self) -> str:
        return "robots.txt rule and sitemap discovery"

    def get_capabilities(self) -> list[str]:
        return [
            "Allow/Disallow rules per user agent",
            "Sitemap discovery",
            "Crawl-delay detection",
        ]

    async def scan(
        self,
        target: ScanTarget,
        options: ScanOptions | None = None,
    ) -> RobotsResult:
        """Parse ``<origin>/robots.txt``."""
        options = options or ScanOptions()
        start_time = time.time()
        robots_url = urljoin(target.origin, "/robots.txt")

        self.logger.info("robots_scan_started", target=robots_url)

        content = await self._fetch(robots_url, target, options)
        result = parse_robots_txt(content.body, robots_url)

        self.logger.info(
            "robots_scan_completed",
            target=robots_url,
            rules=len(result.rules),
            sitemaps=len(result.sitemaps),
            duration=time.time() - start_time,
        )

        return result
