"""Web technology stack scanner."""

import time

from recontools.detection import collect_matches
from recontools.infrastructure.http import ResilientFetcher
from recontools.models import (
    ScanOptions,
    ScanTarget,
    SignatureCorpus,
    TechDetectionResult,
    TechMatch,
)
from recontools.scanners.base import FetchingScanner
from recontools.scanners.registry import ScannerRegistry
from recontools.signatures import get_tech_corpus


@ScannerRegistry.register
class WebTechScanner(FetchingScanner[TechDetectionResult]):
    """Multi-match technology detection grouped by category."""

    failure_prefix = "Failed to detect technologies"

    def __init__(
        self,
        fetcher: ResilientFetcher | None = None,
        corpus: SignatureCorpus | None = None,
    ) -> None:
        super().__init__(fetcher)
        self._corpus = corpus

    @property
    def name(self) -> str:
        return "tech"

    @property
    def description(self) -> str:
        return "Web technology stack detection"

    def get_capabilities(self) -> list[str]:
        return [
            "Framework detection",
            "Analytics detection",
            "CDN detection",
            "Server identification",
        ]

    @property
    def corpus(self) -> SignatureCorpus:
        return self._corpus if self._corpus is not None else get_tech_corpus()

    async def scan(
        self,
        target: ScanTarget,
        options: ScanOptions | None = None,
    ) -> TechDetectionResult:
        """Detect every technology with at least one piece of evidence."""
        options = options or ScanOptions()
        start_time = time.time()

        self.logger.info("tech_scan_started", target=target.url)

        content = await self._fetch(target.url, target, options)
        grouped = collect_matches(content, self.corpus)

        result = TechDetectionResult(
            url=target.url,
            technologies_by_category={
                category: [
                    TechMatch(name=c.name, confidence=c.score, evidence=c.evidence)
                    for c in candidates
                ]
                for category, candidates in grouped.items()
            },
        )

        self.logger.info(
            "tech_scan_completed",
            target=target.url,
            technologies=result.technology_names,
            duration=time.time() - start_time,
        )

        return result
