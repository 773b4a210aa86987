"""Pydantic data models for ReconTools."""

from recontools.models.base import BaseSchema
from recontools.models.target import ScanTarget, ScanOptions
from recontools.models.fetch import FetchResult
from recontools.models.detection import (
    EvidenceField,
    EvidenceItem,
    SignaturePattern,
    SignatureCorpus,
    DetectionResult,
    TechMatch,
    TechDetectionResult,
)
from recontools.models.dns import (
    DNSRecord,
    DNSLookupResult,
    ResourceRecord,
    SubdomainRecord,
    SubdomainScanResult,
)
from recontools.models.headers import HeaderResult, SECURITY_HEADERS
from recontools.models.discovery import RobotsRule, RobotsResult
from recontools.models.email import EmailResult
from recontools.models.ssl import (
    TLSProtocol,
    TLSVulnerabilities,
    CertificateSummary,
    TLSResult,
)

__all__ = [
    "BaseSchema",
    "ScanTarget",
    "ScanOptions",
    "FetchResult",
    "EvidenceField",
    "EvidenceItem",
    "SignaturePattern",
    "SignatureCorpus",
    "DetectionResult",
    "TechMatch",
    "TechDetectionResult",
    "DNSRecord",
    "DNSLookupResult",
    "ResourceRecord",
    "SubdomainRecord",
    "SubdomainScanResult",
    "HeaderResult",
    "SECURITY_HEADERS",
    "RobotsRule",
    "RobotsResult",
    "EmailResult",
    "TLSProtocol",
    "TLSVulnerabilities",
    "CertificateSummary",
    "TLSResult",
]
