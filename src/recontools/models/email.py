"""Email extraction models."""

from datetime import datetime

from pydantic import Field, computed_field

from recontools.models.base import BaseSchema, utcnow


class EmailResult(BaseSchema):
    """Lowercased, deduplicated addresses found on a page."""

    url: str
    timestamp: datetime = Field(default_factory=utcnow)
    emails: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def total(self) -> int:
        return len(self.emails)
