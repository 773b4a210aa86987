"""SSL/TLS grading scanner."""

from recontools.scanners.ssl.scanner import SSLScanner

__all__ = ["SSLScanner"]
