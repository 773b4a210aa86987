"""DNS-over-HTTPS JSON API client."""

from typing import Any

import dns.rdatatype
import httpx
from pydantic import BaseModel, ConfigDict, Field

from recontools.core.config import get_settings
from recontools.core.exceptions import MalformedResponseError
from recontools.infrastructure.http import HTTPClient


class DoHAnswer(BaseModel):
    """Answer entry of a DoH JSON response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    type: int
    ttl: int = Field(default=0, alias="TTL")
    data: str = ""

    @property
    def type_name(self) -> str:
        return rdtype_name(self.type)


class DoHResponse(BaseModel):
    """DoH JSON response (``Status`` 0 is NOERROR)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: int = Field(alias="Status")
    answer: list[DoHAnswer] = Field(default_factory=list, alias="Answer")

    @property
    def resolved(self) -> bool:
        return self.status == 0 and bool(self.answer)


def rdtype_name(rdtype: int) -> str:
    """Mnemonic for a numeric RR type (1 -> 'A')."""
    try:
        return dns.rdatatype.to_text(rdtype)
    except ValueError:
        return f"TYPE{rdtype}"


class DoHClient:
    """Resolve names through a DoH JSON endpoint (``/resolve?name=&type=``).

    Used as an async context manager, every query made inside the block
    shares one HTTP client; otherwise each query opens its own.
    """

    def __init__(
        self,
        endpoint: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self.endpoint = endpoint or settings.doh_endpoint
        self.timeout = timeout
        self._client = client
        self._session: HTTPClient | None = None
        self._depth = 0

    async def __aenter__(self) -> "DoHClient":
        if self._session is None:
            session = HTTPClient(self._client, timeout=self.timeout)
            await session.__aenter__()
            self._session = session
        self._depth += 1
        return self

    async def __aexit__(self, *args: Any) -> None:
        self._depth -= 1
        if self._depth == 0 and self._session is not None:
            session, self._session = self._session, None
            await session.__aexit__(*args)

    async def resolve(
        self,
        name: str,
        rdtype: str | None = None,
        timeout: float | None = None,
    ) -> DoHResponse:
        """Query ``name``; without ``rdtype`` the resolver default (A) applies.

        Raises:
            HttpError: the resolver answered with a non-2xx status
            MalformedResponseError: the body is not a DoH JSON document
            httpx.HTTPError: transport failure
        """
        if self._session is not None:
            return await self._query(self._session, name, rdtype, timeout)
        async with HTTPClient(self._client, timeout=self.timeout) as http:
            return await self._query(http, name, rdtype, timeout)

    async def _query(
        self,
        http: HTTPClient,
        name: str,
        rdtype: str | None,
        timeout: float | None,
    ) -> DoHResponse:
        params = {"name": name}
        if rdtype:
            params["type"] = rdtype
        kwargs: dict[str, Any] = {}
        if timeout:
            kwargs["timeout"] = timeout

        try:
            data = await http.get_json(
                self.endpoint,
                params=params,
                headers={"Accept": "application/dns-json"},
                **kwargs,
            )
            return DoHResponse.model_validate(data)
        except ValueError as e:
            raise MalformedResponseError(f"Invalid DoH response for {name}") from e
