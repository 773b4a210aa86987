"""Target and scan options models."""

import re
from urllib.parse import urlsplit

from pydantic import Field, ValidationError as PydanticValidationError, field_validator

from recontools.core.exceptions import ValidationError
from recontools.models.base import BaseSchema

DOMAIN_PATTERN = re.compile(
    r"^(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}$"
)

# Forbidden domain patterns (SSRF protection)
FORBIDDEN_DOMAINS = [
    "localhost",
    "localhost.localdomain",
    "internal",
    "intranet",
    "corp",
    "local",
]

FORBIDDEN_DOMAIN_SUFFIXES = [
    ".internal",
    ".local",
    ".localhost",
    ".corp",
    ".intranet",
]


def validate_hostname(hostname: str) -> str:
    """Validate a DNS hostname and return it lowercased."""
    if len(hostname) > 253:
        raise ValueError("Domain too long (max 253 characters)")

    if not DOMAIN_PATTERN.match(hostname):
        raise ValueError(f"Invalid domain format: {hostname}")

    domain_lower = hostname.lower()

    # Prevent internal/localhost scanning
    if domain_lower in FORBIDDEN_DOMAINS:
        raise ValueError(f"Cannot scan internal domain: {hostname}")

    for suffix in FORBIDDEN_DOMAIN_SUFFIXES:
        if domain_lower.endswith(suffix):
            raise ValueError(f"Cannot scan internal domain: {hostname}")

    return domain_lower


class ScanTarget(BaseSchema):
    """Target specification: a URL or a bare hostname."""

    url: str = Field(description="Normalized target URL")

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("Target is required")

        v = v.strip()
        if "://" not in v:
            v = f"https://{v}"

        parts = urlsplit(v)
        if parts.scheme.lower() not in ("http", "https"):
            raise ValueError(f"Unsupported scheme: {parts.scheme}")

        try:
            hostname = parts.hostname
        except ValueError as e:
            raise ValueError(f"Invalid URL: {v}") from e
        if not hostname:
            raise ValueError(f"Invalid URL: {v}")

        validate_hostname(hostname)
        return v

    @property
    def hostname(self) -> str:
        """Lowercased host part of the target."""
        return urlsplit(self.url).hostname or ""

    @property
    def origin(self) -> str:
        """Scheme and network location, without path."""
        parts = urlsplit(self.url)
        return f"{parts.scheme}://{parts.netloc}"

    @classmethod
    def parse(cls, raw: str) -> "ScanTarget":
        """Build a target, raising ValidationError on bad input."""
        try:
            return cls(url=raw)
        except PydanticValidationError as e:
            reason = e.errors()[0].get("msg", str(e)) if e.errors() else str(e)
            raise ValidationError(f"Invalid target '{raw}': {reason}") from e


class ScanOptions(BaseSchema):
    """Per-invocation options. Unset values fall back to Settings."""

    timeout_seconds: float | None = Field(default=None, gt=0, le=120)

    # Subdomain probing
    subdomains: list[str] | None = None
    batch_size: int | None = Field(default=None, ge=1, le=100)
    batch_delay_ms: int | None = Field(default=None, ge=0, le=60000)
    paced: bool = True

    # DNS lookup
    record_types: list[str] | None = None

    # TLS grading
    poll_interval: float | None = Field(default=None, ge=0, le=300)
    max_polls: int | None = Field(default=None, ge=1, le=1000)

    # CMS detection
    confidence_floor: int | None = Field(default=None, ge=0, le=100)
