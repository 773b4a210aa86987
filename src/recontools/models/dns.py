"""DNS lookup and subdomain scan result models."""

from datetime import datetime

from pydantic import Field, computed_field

from recontools.models.base import BaseSchema, utcnow


class DNSRecord(BaseSchema):
    """Single DNS answer from a record-type lookup."""

    name: str
    ttl: int
    data: str


class DNSLookupResult(BaseSchema):
    """Records per type. Types that failed or had no answers are absent."""

    domain: str
    timestamp: datetime = Field(default_factory=utcnow)
    records: dict[str, list[DNSRecord]] = Field(default_factory=dict)

    @property
    def total_records(self) -> int:
        return sum(len(records) for records in self.records.values())


class ResourceRecord(BaseSchema):
    """Answer record of a resolving subdomain."""

    type: int
    type_name: str | None = None
    data: str


class SubdomainRecord(BaseSchema):
    """Subdomain that resolved, with its answers."""

    name: str
    records: list[ResourceRecord] = Field(default_factory=list)


class SubdomainScanResult(BaseSchema):
    """Aggregate of a subdomain probe run."""

    domain: str
    timestamp: datetime = Field(default_factory=utcnow)
    subdomains: list[SubdomainRecord] = Field(default_factory=list)

    @computed_field
    @property
    def total(self) -> int:
        return len(self.subdomains)

    @property
    def names(self) -> list[str]:
        return [s.name for s in self.subdomains]
