"""HTTP header analysis scanner."""

from recontools.scanners.headers.scanner import HeadersScanner, categorize_headers

__all__ = ["HeadersScanner", "categorize_headers"]
