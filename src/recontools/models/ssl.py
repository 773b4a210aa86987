"""TLS grading models."""

from datetime import datetime

from pydantic import Field

from recontools.models.base import BaseSchema, utcnow


class TLSProtocol(BaseSchema):
    """Protocol version supported by the endpoint."""

    name: str
    version: str


class TLSVulnerabilities(BaseSchema):
    """Vulnerability flags reported by the grader."""

    heartbleed: bool = False
    poodle: bool = False
    vuln_beast: bool = False
    freak: bool = False
    logjam: bool = False
    drown_vulnerable: bool = False

    @property
    def any_vulnerable(self) -> bool:
        return any(self.model_dump().values())


class CertificateSummary(BaseSchema):
    """Certificate details as reported by the grader."""

    subject: str | None = None
    issuer: str | None = None
    valid_from: datetime | None = None
    valid_to: datetime | None = None
    key_strength: int | None = None


class TLSResult(BaseSchema):
    """TLS configuration grade for one host."""

    url: str
    hostname: str
    timestamp: datetime = Field(default_factory=utcnow)
    grade: str | None = None
    protocols: list[TLSProtocol] = Field(default_factory=list)
    vulnerabilities: TLSVulnerabilities = Field(default_factory=TLSVulnerabilities)
    certificates: list[CertificateSummary] = Field(default_factory=list)
    polls: int = 0
