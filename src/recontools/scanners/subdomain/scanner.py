"""Common-subdomain prober.

Candidates are resolved through the DoH client in fixed-size batches:
queries within a batch run concurrently, batches run one after another
with a pause in between. The batch size and pause are the only throttle
on the shared resolver.
"""

import asyncio
import time

import httpx

from recontools.core.config import get_settings
from recontools.core.exceptions import ReconError, ValidationError
from recontools.core.logging import get_logger
from recontools.infrastructure.doh import DoHClient
from recontools.infrastructure.polling import Sleep
from recontools.models import (
    ResourceRecord,
    ScanOptions,
    ScanTarget,
    SubdomainRecord,
    SubdomainScanResult,
)
from recontools.scanners.base import BaseScanner
from recontools.scanners.registry import ScannerRegistry


class SubdomainProber:
    """Batched, paced resolution of candidate subdomain names."""

    def __init__(
        self,
        doh: DoHClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.doh = doh or DoHClient()
        self.sleep = sleep
        self.logger = get_logger("subdomain_prober")

    async def probe(
        self,
        domain: str,
        candidates: list[str],
        batch_size: int = 5,
        batch_delay: float = 1.0,
        paced: bool = True,
        timeout: float | None = None,
    ) -> SubdomainScanResult:
        """Resolve ``<candidate>.<domain>`` for every candidate.

        Names that error or do not resolve contribute nothing; a resolver
        outage yields an empty result rather than an error.

        Raises:
            ValidationError: invalid batch size or duplicate candidates
        """
        if batch_size < 1:
            raise ValidationError(f"Batch size must be positive, got {batch_size}")
        if len(set(candidates)) != len(candidates):
            raise ValidationError("Candidate subdomain list contains duplicates")

        found: list[SubdomainRecord] = []
        batches = [
            candidates[i:i + batch_size] for i in range(0, len(candidates), batch_size)
        ]

        async with self.doh:
            for index, batch in enumerate(batches):
                results = await asyncio.gather(
                    *(self._check(candidate, domain, timeout) for candidate in batch)
                )
                found.extend(record for record in results if record is not None)

                self.logger.debug(
                    "subdomain_batch_completed",
                    domain=domain,
                    batch=index + 1,
                    batches=len(batches),
                    found=len(found),
                )

                if paced and batch_delay > 0 and index + 1 < len(batches):
                    await self.sleep(batch_delay)

        return SubdomainScanResult(domain=domain, subdomains=found)

    async def _check(
        self,
        candidate: str,
        domain: str,
        timeout: float | None = None,
    ) -> SubdomainRecord | None:
        """Resolve one name; None when it errors or does not resolve."""
        fqdn = f"{candidate}.{domain}"
        try:
            response = await self.doh.resolve(fqdn, timeout=timeout)
        except (ReconError, httpx.HTTPError) as e:
            self.logger.debug(
                "subdomain_query_failed",
                name=fqdn,
                error=str(e) or type(e).__name__,
            )
            return None

        if not response.resolved:
            return None

        return SubdomainRecord(
            name=fqdn,
            records=[
                ResourceRecord(type=answer.type, type_name=answer.type_name, data=answer.data)
                for answer in response.answer
            ],
        )


@ScannerRegistry.register
class SubdomainScanner(BaseScanner[SubdomainScanResult]):
    """Probe common subdomain names of the target."""

    failure_prefix = "Failed to scan subdomains"

    def __init__(
        self,
        doh: DoHClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        super().__init__()
        self._doh = doh
        self._sleep = sleep

    @property
    def name(self) -> str:
        return "subdomains"

    @property
    def description(self) -> str:
        return "Common subdomain discovery"

    def get_capabilities(self) -> list[str]:
        return ["Wordlist subdomain probing", "Paced batch resolution"]

    async def scan(
        self,
        target: ScanTarget,
        options: ScanOptions | None = None,
    ) -> SubdomainScanResult:
        """Probe the configured or supplied candidate names."""
        options = options or ScanOptions()
        settings = get_settings()
        domain = target.hostname
        candidates = options.subdomains if options.subdomains is not None else settings.subdomain_wordlist
        batch_size = options.batch_size or settings.subdomain_batch_size
        batch_delay = (
            options.batch_delay_ms / 1000
            if options.batch_delay_ms is not None
            else settings.subdomain_batch_delay
        )
        start_time = time.time()

        self.logger.info(
            "subdomains_scan_started",
            target=domain,
            candidates=len(candidates),
            batch_size=batch_size,
        )

        prober = SubdomainProber(self._doh, sleep=self._sleep)
        result = await prober.probe(
            domain,
            candidates,
            batch_size=batch_size,
            batch_delay=batch_delay,
            paced=options.paced,
            timeout=options.timeout_seconds,
        )

        self.logger.info(
            "subdomains_scan_completed",
            target=domain,
            total=result.total,
            duration=time.time() - start_time,
        )

        return result
