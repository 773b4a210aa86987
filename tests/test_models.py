"""Tests for targets, options, settings and result models."""

import pytest

from recontools.core.config import DEFAULT_SUBDOMAINS, Settings
from recontools.core.exceptions import HttpError, ScanError, ValidationError
from recontools.models import (
    EmailResult,
    ScanOptions,
    ScanTarget,
    SubdomainRecord,
    SubdomainScanResult,
    TLSVulnerabilities,
)


class TestScanTarget:
    def test_bare_hostname_gets_https(self):
        target = ScanTarget.parse("Example.com")
        assert target.url == "https://Example.com"
        assert target.hostname == "example.com"
        assert target.origin == "https://Example.com"

    def test_url_kept_with_path(self):
        target = ScanTarget.parse("http://blog.example.com/posts?page=2")
        assert target.hostname == "blog.example.com"
        assert target.origin == "http://blog.example.com"

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            "ftp://example.com",
            "https://",
            "not a domain",
            "localhost",
            "https://printer.local/",
            "intranet.corp",
        ],
    )
    def test_invalid_targets(self, raw):
        with pytest.raises(ValidationError):
            ScanTarget.parse(raw)

    def test_internal_domain_message(self):
        with pytest.raises(ValidationError, match="Cannot scan internal domain"):
            ScanTarget.parse("build.internal")


class TestScanOptions:
    def test_defaults_defer_to_settings(self):
        options = ScanOptions()
        assert options.subdomains is None
        assert options.batch_size is None
        assert options.paced is True

    def test_rejects_out_of_range(self):
        with pytest.raises(ValueError):
            ScanOptions(batch_size=0)
        with pytest.raises(ValueError):
            ScanOptions(confidence_floor=101)


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.subdomain_batch_size == 5
        assert settings.subdomain_batch_delay == 1.0
        assert settings.subdomain_wordlist == DEFAULT_SUBDOMAINS
        assert len(settings.subdomain_wordlist) == len(set(settings.subdomain_wordlist))
        assert settings.cms_confidence_floor == 0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SUBDOMAIN_BATCH_DELAY_MS", "250")
        monkeypatch.setenv("DNS_RECORD_TYPES", '["a", " mx "]')

        settings = Settings(_env_file=None)

        assert settings.subdomain_batch_delay == 0.25
        assert settings.dns_record_types == ["A", "MX"]


class TestResults:
    def test_subdomain_total_is_derived(self):
        result = SubdomainScanResult(
            domain="example.com",
            subdomains=[SubdomainRecord(name="www.example.com")],
        )
        assert result.total == 1
        assert result.model_dump()["total"] == 1

    def test_total_cannot_be_supplied(self):
        with pytest.raises(ValueError):
            SubdomainScanResult(domain="example.com", total=99)

    def test_totals_follow_their_lists(self):
        subdomains = SubdomainScanResult(domain="example.com")
        subdomains.subdomains.append(SubdomainRecord(name="www.example.com"))
        emails = EmailResult(url="https://example.com", emails=["a@example.com"])
        emails.emails.append("b@example.com")

        assert subdomains.total == len(subdomains.subdomains) == 1
        assert emails.total == len(emails.emails) == 2

    def test_vulnerabilities_flag(self):
        assert TLSVulnerabilities().any_vulnerable is False
        assert TLSVulnerabilities(freak=True).any_vulnerable is True


class TestExceptions:
    def test_http_error_message(self):
        error = HttpError(404)
        assert error.message == "HTTP error! status: 404"
        assert error.status_code == 404

    def test_scan_error_keeps_cause(self):
        cause = HttpError(500)
        error = ScanError("Failed: HTTP error! status: 500", scanner="cms", cause=cause)
        assert error.cause is cause
        assert str(error) == "Failed: HTTP error! status: 500"
