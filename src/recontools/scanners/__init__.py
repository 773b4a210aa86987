"""Scanner modules for ReconTools."""

from recontools.scanners.base import BaseScanner, FetchingScanner
from recontools.scanners.registry import ScannerRegistry
from recontools.scanners.cms import CMSScanner
from recontools.scanners.webtech import WebTechScanner
from recontools.scanners.headers import HeadersScanner
from recontools.scanners.dns import DNSScanner
from recontools.scanners.subdomain import SubdomainScanner, SubdomainProber
from recontools.scanners.discovery import RobotsScanner
from recontools.scanners.email import EmailScanner
from recontools.scanners.ssl import SSLScanner

__all__ = [
    "BaseScanner",
    "FetchingScanner",
    "ScannerRegistry",
    "CMSScanner",
    "WebTechScanner",
    "HeadersScanner",
    "DNSScanner",
    "SubdomainScanner",
    "SubdomainProber",
    "RobotsScanner",
    "EmailScanner",
    "SSLScanner",
]
