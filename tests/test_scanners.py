"""Tests for the content-fetching scanners."""

from urllib.parse import unquote

import httpx
import pytest

from recontools.core.exceptions import HttpError, NetworkError, ScanError
from recontools.models import ScanOptions, ScanTarget
from recontools.scanners import (
    CMSScanner,
    EmailScanner,
    HeadersScanner,
    RobotsScanner,
    ScannerRegistry,
    WebTechScanner,
)
from recontools.scanners.cms import extract_generator_version
from recontools.scanners.discovery import parse_robots_txt
from recontools.scanners.email import extract_emails
from recontools.scanners.headers import categorize_headers

WORDPRESS_PAGE = '<html><head><meta name="generator" content="WordPress 5.8"></head></html>'


class TestCMSScanner:
    @pytest.mark.asyncio
    async def test_detects_wordpress(self, sample_target, page_fetcher):
        result = await CMSScanner(page_fetcher(WORDPRESS_PAGE)).scan(sample_target)

        assert result.detected is True
        assert result.candidate_name == "wordpress"
        assert result.confidence == 11
        assert result.version == "5.8"
        assert result.evidence_labels == ['Meta: <meta name="generator" content="WordPress']

    @pytest.mark.asyncio
    async def test_plain_page_detects_nothing(self, sample_target, page_fetcher):
        result = await CMSScanner(page_fetcher("<html><body>Hello</body></html>")).scan(
            sample_target
        )

        assert result.detected is False
        assert result.candidate_name is None
        assert result.confidence == 0
        assert result.evidence == []

    @pytest.mark.asyncio
    async def test_confidence_floor(self, sample_target, page_fetcher):
        scanner = CMSScanner(page_fetcher(WORDPRESS_PAGE))
        result = await scanner.scan(sample_target, ScanOptions(confidence_floor=20))
        assert result.detected is False

    @pytest.mark.asyncio
    async def test_http_error_wrapped(self, sample_target, page_fetcher):
        with pytest.raises(ScanError) as exc_info:
            await CMSScanner(page_fetcher(status=503)).scan(sample_target)

        assert exc_info.value.message == "Failed to detect CMS: HTTP error! status: 503"
        assert isinstance(exc_info.value.cause, HttpError)
        assert exc_info.value.scanner == "cms"

    @pytest.mark.asyncio
    async def test_network_error_wrapped(self, sample_target, make_fetcher):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        with pytest.raises(ScanError) as exc_info:
            await CMSScanner(make_fetcher(handler)).scan(sample_target)

        assert exc_info.value.message == "Failed to detect CMS: Network error"
        assert isinstance(exc_info.value.cause, NetworkError)

    def test_generator_version(self):
        assert extract_generator_version(WORDPRESS_PAGE, "wordpress") == "5.8"
        assert extract_generator_version(WORDPRESS_PAGE, "drupal") is None

    @pytest.mark.parametrize(
        "tag",
        [
            '<meta content="WordPress 6.4.2" name="generator">',
            "<META NAME='Generator' CONTENT='wordpress 6.4.2' />",
            '<meta property="og:site_name" content="Blog">'
            '<meta content="WordPress 6.4.2" name="generator">',
        ],
    )
    def test_generator_version_any_attribute_order(self, tag):
        assert extract_generator_version(tag, "wordpress") == "6.4.2"

    def test_version_outside_generator_tag_ignored(self):
        body = '<meta name="description" content="WordPress 6.4.2 tips">'
        assert extract_generator_version(body, "wordpress") is None


class TestWebTechScanner:
    @pytest.mark.asyncio
    async def test_groups_matches_by_category(self, sample_target, page_fetcher):
        fetcher = page_fetcher(
            '<html><script src="/static/jquery.min.js"></script></html>',
            headers={"Server": "nginx/1.25"},
        )

        result = await WebTechScanner(fetcher).scan(sample_target)

        assert list(result.technologies_by_category) == ["frameworks", "server"]
        assert [t.name for t in result.technologies_by_category["frameworks"]] == ["jquery"]
        assert result.technologies_by_category["frameworks"][0].confidence == 100
        assert result.technologies_by_category["server"][0].name == "nginx"
        assert result.technologies_by_category["server"][0].confidence == 50
        assert result.total == 2
        assert result.technology_names == ["jquery", "nginx"]

    @pytest.mark.asyncio
    async def test_nothing_detected(self, sample_target, page_fetcher):
        result = await WebTechScanner(page_fetcher("<p>plain</p>")).scan(sample_target)
        assert result.technologies_by_category == {}
        assert result.total == 0


class TestHeadersScanner:
    def test_categorize_headers(self):
        grouped = categorize_headers(
            {
                "strict-transport-security": "max-age=31536000",
                "cache-control": "no-cache",
                "access-control-allow-origin": "*",
                "server": "nginx",
                "x-custom": "1",
            }
        )

        assert list(grouped) == ["security", "caching", "cors", "server", "other"]
        assert grouped["other"] == {"x-custom": "1"}

    @pytest.mark.asyncio
    async def test_security_header_presence(self, sample_target, page_fetcher):
        fetcher = page_fetcher(
            "ok",
            headers={"Strict-Transport-Security": "max-age=1", "X-Frame-Options": "DENY"},
        )

        result = await HeadersScanner(fetcher).scan(sample_target)

        assert result.security_headers["strict-transport-security"] is True
        assert result.security_headers["x-frame-options"] is True
        assert result.security_headers["content-security-policy"] is False
        assert result.missing_security_headers == [
            "content-security-policy",
            "x-content-type-options",
            "x-xss-protection",
        ]
        assert "x-frame-options" in result.categories["security"]
        assert "content-type" in result.categories["other"]


class TestRobots:
    def test_parse_rules_and_sitemaps(self):
        content = "\n".join(
            [
                "# comment",
                "User-agent: *",
                "Disallow: /admin",
                "Allow: /admin/public",
                "",
                "User-agent: Googlebot",
                "Disallow:",
                "Crawl-delay: 10",
                "Sitemap: https://example.com/sitemap.xml",
            ]
        )

        result = parse_robots_txt(content, "https://example.com/robots.txt")

        assert [(r.user_agent, r.type, r.path) for r in result.rules] == [
            ("*", "disallow", "/admin"),
            ("*", "allow", "/admin/public"),
            ("Googlebot", "disallow", ""),
        ]
        assert result.sitemaps == ["https://example.com/sitemap.xml"]
        assert result.user_agents == ["*", "Googlebot"]
        assert result.crawl_delay == 10.0
        assert result.disallowed_paths == ["/admin", ""]

    def test_rules_before_user_agent_default_to_star(self):
        result = parse_robots_txt("Disallow: /private", "https://example.com/robots.txt")
        assert result.rules[0].user_agent == "*"

    @pytest.mark.asyncio
    async def test_fetches_robots_from_origin(self, make_fetcher):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(unquote(request.url.query.decode()))
            return httpx.Response(200, text="User-agent: *\nDisallow: /admin\n")

        target = ScanTarget.parse("https://example.com/blog/post")
        result = await RobotsScanner(make_fetcher(handler)).scan(target)

        assert requested == ["https://example.com/robots.txt"]
        assert result.url == "https://example.com/robots.txt"
        assert result.disallowed_paths == ["/admin"]

    @pytest.mark.asyncio
    async def test_missing_robots_is_scan_error(self, sample_target, page_fetcher):
        with pytest.raises(ScanError, match="Failed to analyze robots.txt: HTTP error! status: 404"):
            await RobotsScanner(page_fetcher(status=404)).scan(sample_target)


class TestEmails:
    def test_deduplicates_case_insensitively(self):
        assert extract_emails("Test@Example.com and test@example.com") == ["test@example.com"]

    def test_mailto_links(self):
        content = '<a href="mailto:sales%40example.org?subject=Hi">Sales</a>'
        assert extract_emails(content) == ["sales@example.org"]

    @pytest.mark.asyncio
    async def test_scan(self, sample_target, page_fetcher):
        fetcher = page_fetcher('Contact <a href="mailto:Info@Example.com">Info@Example.com</a>')

        result = await EmailScanner(fetcher).scan(sample_target)

        assert result.emails == ["info@example.com"]
        assert result.total == 1


def test_registry_lists_every_tool():
    assert set(ScannerRegistry.list_all()) == {
        "cms",
        "tech",
        "headers",
        "dns",
        "subdomains",
        "robots",
        "emails",
        "ssl",
    }
    assert isinstance(ScannerRegistry.get_instance("cms"), CMSScanner)
    assert ScannerRegistry.get_instance("nope") is None
