"""Contact email extraction scanner."""

import re
import time
from urllib.parse import unquote

from recontools.models import EmailResult, ScanOptions, ScanTarget
from recontools.scanners.base import FetchingScanner
from recontools.scanners.registry import ScannerRegistry

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
MAILTO_PATTERN = re.compile(r"mailto:([^\"'\s>]+)", re.IGNORECASE)


def extract_emails(content: str) -> list[str]:
    """Addresses in body text and ``mailto:`` links, lowercased and deduplicated.

    Order follows first appearance, text matches before mailto values.
    """
    found: dict[str, None] = {}

    for email in EMAIL_PATTERN.findall(content):
        found.setdefault(email.lower(), None)

    for raw in MAILTO_PATTERN.findall(content):
        address = unquote(raw.split("?", 1)[0]).strip()
        if EMAIL_PATTERN.fullmatch(address):
            found.setdefault(address.lower(), None)

    return list(found)


@ScannerRegistry.register
class EmailScanner(FetchingScanner[EmailResult]):
    """Find contact addresses published on a page."""

    failure_prefix = "Failed to find emails"

    @property
    def name(self) -> str:
        return "emails"

    @property
    def description(self) -> str:
        return "Contact email address extraction"

    def get_capabilities(self) -> list[str]:
        return ["Body text addresses", "mailto: links"]

    async def scan(
        self,
        target: ScanTarget,
        options: ScanOptions | None = None,
    ) -> EmailResult:
        """Extract email addresses from the target page."""
        options = options or ScanOptions()
        start_time = time.time()

        self.logger.info("emails_scan_started", target=target.url)

        content = await self._fetch(target.url, target, options)
        result = EmailResult(url=target.url, emails=extract_emails(content.body))

        self.logger.info(
            "emails_scan_completed",
            target=target.url,
            emails=result.total,
            duration=time.time() - start_time,
        )

        return result
