"""Subdomain probing scanner."""

from recontools.scanners.subdomain.scanner import SubdomainProber, SubdomainScanner

__all__ = ["SubdomainProber", "SubdomainScanner"]
