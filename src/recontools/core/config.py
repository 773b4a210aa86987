"""Configuration management using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Common subdomains probed when the caller supplies no wordlist
DEFAULT_SUBDOMAINS = [
    "www", "mail", "ftp", "smtp", "pop", "ns1", "ns2", "dns1", "dns2",
    "mx1", "webmail", "admin", "dev", "test", "portal", "host", "beta",
    "staging", "api", "cdn", "app", "web", "cloud", "db", "sql", "data",
    "git", "svn", "jenkins", "ci", "build", "auth", "login", "sso", "vpn",
    "remote",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Content fetching
    http_timeout: float = Field(default=10.0, gt=0, le=120)
    user_agent: str = Field(default="ReconTools/1.0")
    use_relays: bool = Field(default=True)
    relay_endpoints: list[str] = Field(
        default=[
            "https://corsproxy.io/?",
            "https://api.codetabs.com/v1/proxy?quest=",
        ],
        description="Relay base URLs, tried in order. The target URL is appended encoded.",
    )

    # DNS-over-HTTPS
    doh_endpoint: str = Field(default="https://dns.google/resolve")
    dns_record_types: list[str] = Field(
        default=["A", "AAAA", "MX", "NS", "TXT", "SOA"]
    )

    # Subdomain probing
    subdomain_batch_size: int = Field(default=5, ge=1, le=100)
    subdomain_batch_delay_ms: int = Field(default=1000, ge=0, le=60000)
    subdomain_wordlist: list[str] = Field(default_factory=lambda: list(DEFAULT_SUBDOMAINS))

    # TLS grading
    tls_grader_endpoint: str = Field(default="https://api.ssllabs.com/api/v3")
    tls_poll_interval: float = Field(default=5.0, ge=0, le=300)
    tls_max_polls: int = Field(default=60, ge=1, le=1000)

    # Detection
    cms_confidence_floor: int = Field(default=0, ge=0, le=100)
    signatures_path: Path | None = Field(default=None)

    # API Configuration
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000)
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"],
        description="Allowed CORS origins. Set to ['*'] for development only.",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["json", "text"] = Field(default="text")

    @field_validator("dns_record_types")
    @classmethod
    def normalize_record_types(cls, v: list[str]) -> list[str]:
        return [t.strip().upper() for t in v if t.strip()]

    @property
    def subdomain_batch_delay(self) -> float:
        """Inter-batch delay in seconds."""
        return self.subdomain_batch_delay_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
