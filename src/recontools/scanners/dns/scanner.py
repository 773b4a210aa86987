"""DNS record lookup scanner (DNS-over-HTTPS)."""

import asyncio
import time

import httpx

from recontools.core.config import get_settings
from recontools.core.exceptions import ReconError
from recontools.infrastructure.doh import DoHClient
from recontools.models import DNSLookupResult, DNSRecord, ScanOptions, ScanTarget
from recontools.scanners.base import BaseScanner
from recontools.scanners.registry import ScannerRegistry


@ScannerRegistry.register
class DNSScanner(BaseScanner[DNSLookupResult]):
    """Per-type DNS record lookup."""

    failure_prefix = "DNS lookup failed"

    def __init__(self, doh: DoHClient | None = None) -> None:
        super().__init__()
        self._doh = doh

    @property
    def name(self) -> str:
        return "dns"

    @property
    def description(self) -> str:
        return "DNS record lookup over DNS-over-HTTPS"

    def get_capabilities(self) -> list[str]:
        return [
            "A/AAAA record lookup",
            "MX record lookup",
            "NS record lookup",
            "TXT record lookup",
            "SOA record lookup",
        ]

    async def scan(
        self,
        target: ScanTarget,
        options: ScanOptions | None = None,
    ) -> DNSLookupResult:
        """Query every record type concurrently.

        A type whose query fails or has no answers is left out of the
        result instead of failing the lookup.
        """
        options = options or ScanOptions()
        settings = get_settings()
        record_types = [t.upper() for t in (options.record_types or settings.dns_record_types)]
        domain = target.hostname
        start_time = time.time()

        self.logger.info("dns_scan_started", target=domain, record_types=record_types)

        async with self._doh or DoHClient() as doh:
            answers = await asyncio.gather(
                *(
                    self._lookup(doh, domain, record_type, options.timeout_seconds)
                    for record_type in record_types
                )
            )
        records = {
            record_type: found
            for record_type, found in zip(record_types, answers)
            if found
        }

        result = DNSLookupResult(domain=domain, records=records)

        self.logger.info(
            "dns_scan_completed",
            target=domain,
            record_types=list(records),
            records=result.total_records,
            duration=time.time() - start_time,
        )

        return result

    async def _lookup(
        self,
        doh: DoHClient,
        domain: str,
        record_type: str,
        timeout: float | None = None,
    ) -> list[DNSRecord]:
        """Records of one type, empty when the query fails."""
        try:
            response = await doh.resolve(domain, record_type, timeout=timeout)
        except (ReconError, httpx.HTTPError) as e:
            self.logger.warning(
                "dns_record_lookup_failed",
                target=domain,
                record_type=record_type,
                error=str(e) or type(e).__name__,
            )
            return []

        if not response.resolved:
            return []

        return [
            DNSRecord(name=answer.name, ttl=answer.ttl, data=answer.data)
            for answer in response.answer
        ]
