"""robots.txt models."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from recontools.models.base import BaseSchema, utcnow


class RobotsRule(BaseSchema):
    """Allow/Disallow rule scoped to a user agent."""

    user_agent: str = "*"
    type: Literal["allow", "disallow"]
    path: str


class RobotsResult(BaseSchema):
    """Parsed robots.txt."""

    url: str
    timestamp: datetime = Field(default_factory=utcnow)
    rules: list[RobotsRule] = Field(default_factory=list)
    sitemaps: list[str] = Field(default_factory=list)
    user_agents: list[str] = Field(default_factory=list)
    crawl_delay: float | None = None

    @property
    def disallowed_paths(self) -> list[str]:
        return [r.path for r in self.rules if r.type == "disallow"]
