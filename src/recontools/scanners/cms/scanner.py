"""CMS detection scanner."""

import re
import time

from recontools.core.config import get_settings
from recontools.detection import resolve_best
from recontools.infrastructure.http import ResilientFetcher
from recontools.models import DetectionResult, ScanOptions, ScanTarget, SignatureCorpus
from recontools.scanners.base import FetchingScanner
from recontools.scanners.registry import ScannerRegistry
from recontools.signatures import CMS_CATEGORY, get_cms_corpus


META_TAG = re.compile(r"<meta\b[^>]*>", re.IGNORECASE)


def extract_generator_version(body: str, cms: str) -> str | None:
    """Version advertised for ``cms`` by a generator meta tag, if any.

    Attribute order inside the tag does not matter.
    """
    version = re.compile(rf"{re.escape(cms)}!?\s+v?(\d+(?:\.\d+)*)", re.IGNORECASE)
    for tag in META_TAG.findall(body):
        if "generator" not in tag.lower():
            continue
        match = version.search(tag)
        if match:
            return match.group(1)
    return None


@ScannerRegistry.register
class CMSScanner(FetchingScanner[DetectionResult]):
    """Single best-match CMS detection."""

    failure_prefix = "Failed to detect CMS"

    def __init__(
        self,
        fetcher: ResilientFetcher | None = None,
        corpus: SignatureCorpus | None = None,
    ) -> None:
        super().__init__(fetcher)
        self._corpus = corpus

    @property
    def name(self) -> str:
        return "cms"

    @property
    def description(self) -> str:
        return "Content management system detection"

    def get_capabilities(self) -> list[str]:
        return [
            "CMS fingerprinting",
            "Confidence scoring",
            "Generator version extraction",
        ]

    @property
    def corpus(self) -> SignatureCorpus:
        return self._corpus if self._corpus is not None else get_cms_corpus()

    async def scan(
        self,
        target: ScanTarget,
        options: ScanOptions | None = None,
    ) -> DetectionResult:
        """Detect the most likely CMS of the target page."""
        options = options or ScanOptions()
        settings = get_settings()
        floor = (
            options.confidence_floor
            if options.confidence_floor is not None
            else settings.cms_confidence_floor
        )
        start_time = time.time()

        self.logger.info("cms_scan_started", target=target.url)

        content = await self._fetch(target.url, target, options)
        best = resolve_best(content, self.corpus, CMS_CATEGORY, floor=floor)

        if best is None:
            result = DetectionResult(url=target.url)
        else:
            result = DetectionResult(
                url=target.url,
                detected=True,
                candidate_name=best.name,
                confidence=best.score,
                evidence=best.evidence,
                version=extract_generator_version(content.body, best.name),
            )

        self.logger.info(
            "cms_scan_completed",
            target=target.url,
            cms=result.candidate_name,
            confidence=result.confidence,
            duration=time.time() - start_time,
        )

        return result
