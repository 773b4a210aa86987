"""DNS lookup scanner."""

from recontools.scanners.dns.scanner import DNSScanner

__all__ = ["DNSScanner"]
