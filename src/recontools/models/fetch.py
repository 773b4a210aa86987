"""Fetched content models."""

from pydantic import Field, field_validator

from recontools.models.base import BaseSchema


class FetchResult(BaseSchema):
    """Body and response headers of one fetched URL.

    Header names are lowercased here, at the fetch boundary. Downstream
    matching relies on that and never re-normalizes.
    """

    url: str
    body: str = ""
    headers: dict[str, str] = Field(default_factory=dict)
    status_code: int = 200
    transport: str | None = None

    @field_validator("headers", mode="before")
    @classmethod
    def lowercase_header_names(cls, v: object) -> dict[str, str]:
        items = v.items() if hasattr(v, "items") else v
        return {str(name).lower(): str(value) for name, value in items}
