"""Base models and helpers."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema with common configuration.

    Results are created once per invocation and never mutated afterwards.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)
