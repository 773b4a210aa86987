"""Tests for the DoH client, DNS lookup and subdomain probing."""

import httpx
import pytest
from structlog.testing import capture_logs

from recontools.core.exceptions import HttpError, MalformedResponseError, ValidationError
from recontools.infrastructure.doh import DoHClient, rdtype_name
from recontools.models import ScanOptions
from recontools.scanners import DNSScanner, SubdomainProber, SubdomainScanner


def answer(name: str, rdtype: int, data: str, ttl: int = 300) -> dict:
    return {"name": name, "type": rdtype, "TTL": ttl, "data": data}


def resolving(known: dict[str, list[dict]]):
    """Handler resolving names in ``known`` and answering NXDOMAIN otherwise."""

    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.params["name"]
        if name in known:
            return httpx.Response(200, json={"Status": 0, "Answer": known[name]})
        return httpx.Response(200, json={"Status": 3})

    return handler


class TestDoHClient:
    @pytest.mark.asyncio
    async def test_resolve(self, make_doh):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.url.params)
            seen["accept"] = request.headers["accept"]
            return httpx.Response(
                200,
                json={"Status": 0, "Answer": [answer("example.com.", 15, "10 mail.example.com.")]},
            )

        response = await make_doh(handler).resolve("example.com", "MX")

        assert seen == {"name": "example.com", "type": "MX", "accept": "application/dns-json"}
        assert response.resolved is True
        assert response.answer[0].ttl == 300
        assert response.answer[0].type_name == "MX"

    @pytest.mark.asyncio
    async def test_nxdomain_is_not_resolved(self, make_doh):
        response = await make_doh(resolving({})).resolve("missing.example.com")
        assert response.status == 3
        assert response.resolved is False

    @pytest.mark.asyncio
    async def test_error_status(self, make_doh):
        with pytest.raises(HttpError):
            await make_doh(lambda request: httpx.Response(502)).resolve("example.com")

    @pytest.mark.asyncio
    async def test_malformed_body(self, make_doh):
        with pytest.raises(MalformedResponseError):
            await make_doh(lambda request: httpx.Response(200, text="<html>")).resolve("example.com")

        with pytest.raises(MalformedResponseError):
            await make_doh(lambda request: httpx.Response(200, json={"Answer": []})).resolve(
                "example.com"
            )

    def test_rdtype_name(self):
        assert rdtype_name(1) == "A"
        assert rdtype_name(28) == "AAAA"
        assert rdtype_name(16) == "TXT"


class TestDNSScanner:
    @pytest.mark.asyncio
    async def test_failed_types_are_omitted(self, sample_target, make_doh):
        def handler(request: httpx.Request) -> httpx.Response:
            rdtype = request.url.params["type"]
            if rdtype == "A":
                return httpx.Response(
                    200, json={"Status": 0, "Answer": [answer("example.com.", 1, "93.184.216.34")]}
                )
            if rdtype == "MX":
                return httpx.Response(500)
            if rdtype == "NS":
                raise httpx.ConnectError("resolver down", request=request)
            return httpx.Response(200, json={"Status": 0})

        with capture_logs() as logs:
            result = await DNSScanner(make_doh(handler)).scan(
                sample_target, ScanOptions(record_types=["A", "MX", "NS", "TXT"])
            )

        assert list(result.records) == ["A"]
        assert result.records["A"][0].data == "93.184.216.34"
        assert result.total_records == 1
        failed = {e["record_type"] for e in logs if e["event"] == "dns_record_lookup_failed"}
        assert failed == {"MX", "NS"}

    @pytest.mark.asyncio
    async def test_keeps_requested_type_order(self, sample_target, make_doh):
        def handler(request: httpx.Request) -> httpx.Response:
            rdtype = request.url.params["type"]
            code = {"A": 1, "NS": 2}[rdtype]
            return httpx.Response(
                200, json={"Status": 0, "Answer": [answer("example.com.", code, rdtype.lower())]}
            )

        result = await DNSScanner(make_doh(handler)).scan(
            sample_target, ScanOptions(record_types=["ns", "a"])
        )
        assert list(result.records) == ["NS", "A"]


class TestSubdomainProber:
    @pytest.mark.asyncio
    async def test_only_resolving_names_reported(self, make_doh, recording_sleep):
        doh = make_doh(resolving({"www.example.com": [answer("www.example.com.", 1, "1.2.3.4")]}))

        result = await SubdomainProber(doh, sleep=recording_sleep).probe(
            "example.com", ["www", "bogus"]
        )

        assert result.total == 1
        assert result.names == ["www.example.com"]
        assert result.subdomains[0].records[0].type_name == "A"
        assert result.subdomains[0].records[0].data == "1.2.3.4"

    @pytest.mark.asyncio
    async def test_resolver_outage_yields_empty_result(self, make_doh, recording_sleep):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        result = await SubdomainProber(make_doh(handler), sleep=recording_sleep).probe(
            "example.com", ["www", "mail", "api"]
        )

        assert result.total == 0
        assert result.subdomains == []

    @pytest.mark.asyncio
    async def test_pauses_between_batches_only(self, make_doh, recording_sleep):
        candidates = [f"host{i}" for i in range(12)]

        await SubdomainProber(make_doh(resolving({})), sleep=recording_sleep).probe(
            "example.com", candidates, batch_size=5, batch_delay=1.0
        )

        assert recording_sleep.calls == [1.0, 1.0]

    @pytest.mark.asyncio
    async def test_unpaced_or_zero_delay_never_sleeps(self, make_doh, recording_sleep):
        prober = SubdomainProber(make_doh(resolving({})), sleep=recording_sleep)
        candidates = [f"host{i}" for i in range(7)]

        await prober.probe("example.com", candidates, batch_size=2, paced=False)
        await prober.probe("example.com", candidates, batch_size=2, batch_delay=0)

        assert recording_sleep.calls == []

    @pytest.mark.asyncio
    async def test_results_follow_input_order(self, make_doh, recording_sleep):
        known = {
            f"{name}.example.com": [answer(f"{name}.example.com.", 1, "10.0.0.1")]
            for name in ("api", "www", "cdn")
        }

        result = await SubdomainProber(make_doh(resolving(known)), sleep=recording_sleep).probe(
            "example.com", ["www", "nope", "api", "cdn"], batch_size=3
        )

        assert result.names == ["www.example.com", "api.example.com", "cdn.example.com"]

    @pytest.mark.asyncio
    async def test_rejects_duplicates(self, make_doh):
        with pytest.raises(ValidationError):
            await SubdomainProber(make_doh(resolving({}))).probe("example.com", ["www", "www"])

    @pytest.mark.asyncio
    async def test_rejects_non_positive_batch_size(self, make_doh):
        with pytest.raises(ValidationError):
            await SubdomainProber(make_doh(resolving({}))).probe(
                "example.com", ["www"], batch_size=0
            )


class TestSubdomainScanner:
    @pytest.mark.asyncio
    async def test_options_override_settings(self, sample_target, make_doh, recording_sleep):
        known = {"www.example.com": [answer("www.example.com.", 1, "1.2.3.4")]}
        scanner = SubdomainScanner(make_doh(resolving(known)), sleep=recording_sleep)

        result = await scanner.scan(
            sample_target,
            ScanOptions(subdomains=["www", "mail", "ftp"], batch_size=2, batch_delay_ms=250),
        )

        assert result.domain == "example.com"
        assert result.names == ["www.example.com"]
        assert recording_sleep.calls == [0.25]


class TestDoHSession:
    @pytest.mark.asyncio
    async def test_probe_shares_one_client(self, monkeypatch, recording_sleep):
        created = []
        real_client = httpx.AsyncClient
        handler = resolving({"www.example.com": [answer("www.example.com.", 1, "1.2.3.4")]})

        def client_factory(**kwargs):
            client = real_client(transport=httpx.MockTransport(handler), **kwargs)
            created.append(client)
            return client

        monkeypatch.setattr(httpx, "AsyncClient", client_factory)
        doh = DoHClient(endpoint="https://doh.test/resolve")

        result = await SubdomainProber(doh, sleep=recording_sleep).probe(
            "example.com", [f"host{i}" for i in range(6)] + ["www"], batch_size=3
        )

        assert result.names == ["www.example.com"]
        assert len(created) == 1
        assert created[0].is_closed

    @pytest.mark.asyncio
    async def test_nested_sessions_close_once(self, make_client):
        client = make_client(resolving({}))
        doh = DoHClient(endpoint="https://doh.test/resolve", client=client)

        async with doh:
            async with doh:
                await doh.resolve("a.example.com")
            await doh.resolve("b.example.com")

        assert not client.is_closed


class TestTimeouts:
    @pytest.mark.asyncio
    async def test_dns_scan_honours_timeout(self, sample_target, make_doh):
        timeouts = []

        def handler(request: httpx.Request) -> httpx.Response:
            timeouts.append(request.extensions["timeout"]["read"])
            return httpx.Response(200, json={"Status": 3})

        await DNSScanner(make_doh(handler)).scan(
            sample_target, ScanOptions(record_types=["A", "MX"], timeout_seconds=2.5)
        )

        assert timeouts == [2.5, 2.5]

    @pytest.mark.asyncio
    async def test_subdomain_scan_honours_timeout(
        self, sample_target, make_doh, recording_sleep
    ):
        timeouts = []

        def handler(request: httpx.Request) -> httpx.Response:
            timeouts.append(request.extensions["timeout"]["read"])
            return httpx.Response(200, json={"Status": 3})

        await SubdomainScanner(make_doh(handler), sleep=recording_sleep).scan(
            sample_target, ScanOptions(subdomains=["www", "api"], timeout_seconds=4.0)
        )

        assert timeouts == [4.0, 4.0]
