"""HTTP header analysis models."""

from datetime import datetime

from pydantic import Field

from recontools.models.base import BaseSchema, utcnow

# Security headers reported in the presence map
SECURITY_HEADERS = [
    "content-security-policy",
    "strict-transport-security",
    "x-content-type-options",
    "x-frame-options",
    "x-xss-protection",
]


class HeaderResult(BaseSchema):
    """Categorized response headers."""

    url: str
    timestamp: datetime = Field(default_factory=utcnow)
    headers: dict[str, str] = Field(default_factory=dict)
    categories: dict[str, dict[str, str]] = Field(default_factory=dict)
    security_headers: dict[str, bool] = Field(default_factory=dict)
    missing_security_headers: list[str] = Field(default_factory=list)
