"""Signature and detection result models."""

from datetime import datetime
from enum import Enum

from pydantic import Field, field_validator, model_validator

from recontools.models.base import BaseSchema, utcnow


class EvidenceField(str, Enum):
    """Content field a piece of evidence was found in."""

    HTML = "html"
    SCRIPT = "script"
    META = "meta"
    HEADER = "header"


class EvidenceItem(BaseSchema):
    """One matched signal."""

    field: EvidenceField
    pattern: str

    @property
    def label(self) -> str:
        return f"{self.field.value.capitalize()}: {self.pattern}"


class SignaturePattern(BaseSchema):
    """Named technology/CMS fingerprint split by evidence field."""

    name: str
    html: list[str] = Field(default_factory=list)
    scripts: list[str] = Field(default_factory=list)
    meta: list[str] = Field(default_factory=list)
    headers: list[str] = Field(default_factory=list)
    website: str | None = None

    @field_validator("html", "scripts", "meta", "headers")
    @classmethod
    def dedupe_patterns(cls, v: list[str]) -> list[str]:
        # First spelling wins; matching ignores case
        unique: dict[str, str] = {}
        for pattern in v:
            if pattern:
                unique.setdefault(pattern.lower(), pattern)
        return list(unique.values())

    @model_validator(mode="after")
    def require_patterns(self) -> "SignaturePattern":
        if self.total_patterns == 0:
            raise ValueError(f"Signature '{self.name}' has no patterns")
        return self

    @property
    def total_patterns(self) -> int:
        return sum(len(patterns) for _, patterns in self.fields())

    def fields(self) -> list[tuple[EvidenceField, list[str]]]:
        """Evidence fields paired with their pattern lists."""
        return [
            (EvidenceField.HTML, self.html),
            (EvidenceField.SCRIPT, self.scripts),
            (EvidenceField.META, self.meta),
            (EvidenceField.HEADER, self.headers),
        ]


class SignatureCorpus(BaseSchema):
    """Read-only mapping of category -> technology name -> signature."""

    categories: dict[str, dict[str, SignaturePattern]] = Field(default_factory=dict)

    def candidates(self, category: str | None = None) -> list[tuple[str, SignaturePattern]]:
        """Candidates in corpus iteration order, optionally for one category."""
        items = []
        for cat, signatures in self.categories.items():
            if category is not None and cat != category:
                continue
            items.extend((cat, signature) for signature in signatures.values())
        return items

    @property
    def total_signatures(self) -> int:
        return sum(len(signatures) for signatures in self.categories.values())


class DetectionResult(BaseSchema):
    """Single best-match detection (CMS)."""

    url: str
    timestamp: datetime = Field(default_factory=utcnow)
    detected: bool = False
    candidate_name: str | None = None
    confidence: int = Field(default=0, ge=0, le=100)
    evidence: list[EvidenceItem] = Field(default_factory=list)
    version: str | None = None

    @property
    def evidence_labels(self) -> list[str]:
        return [item.label for item in self.evidence]


class TechMatch(BaseSchema):
    """Technology with at least one piece of evidence."""

    name: str
    confidence: int = Field(default=0, ge=0, le=100)
    evidence: list[EvidenceItem] = Field(default_factory=list)


class TechDetectionResult(BaseSchema):
    """Multi-match detection grouped by category (technology stack)."""

    url: str
    timestamp: datetime = Field(default_factory=utcnow)
    technologies_by_category: dict[str, list[TechMatch]] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(len(techs) for techs in self.technologies_by_category.values())

    @property
    def technology_names(self) -> list[str]:
        return [t.name for techs in self.technologies_by_category.values() for t in techs]
