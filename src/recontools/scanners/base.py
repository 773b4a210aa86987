"""Base scanner classes."""

from abc import abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from recontools.core.exceptions import ReconError, ScanError
from recontools.core.interfaces import IScanner
from recontools.core.logging import get_logger
from recontools.infrastructure.http import ResilientFetcher
from recontools.models import FetchResult, ScanOptions, ScanTarget

TResult = TypeVar("TResult", bound=BaseModel)


class BaseScanner(IScanner[TResult], Generic[TResult]):
    """Base class for all scanner implementations."""

    # Prefix of the message a failed scan is reported with
    failure_prefix: str = "Scan failed"

    def __init__(self) -> None:
        self.logger = get_logger(self.name)

    @property
    @abstractmethod
    def name(self) -> str:
        """Scanner module name."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description."""
        ...

    @abstractmethod
    async def scan(
        self,
        target: ScanTarget,
        options: ScanOptions | None = None,
    ) -> TResult:
        """Execute the scan and return results."""
        ...

    def get_capabilities(self) -> list[str]:
        """List of capabilities this scanner provides."""
        return []

    def _wrap_error(self, error: ReconError, target: ScanTarget) -> ScanError:
        """Log a failure and turn it into a ScanError prefixed with the operation."""
        self.logger.error(
            f"{self.name}_scan_failed",
            target=target.url,
            error=error.message,
            error_type=type(error).__name__,
        )
        return ScanError(
            f"{self.failure_prefix}: {error.message}",
            scanner=self.name,
            target=target.url,
            cause=error,
        )


class FetchingScanner(BaseScanner[TResult], Generic[TResult]):
    """Scanner that analyzes content from the resilient fetcher."""

    def __init__(self, fetcher: ResilientFetcher | None = None) -> None:
        super().__init__()
        self._fetcher = fetcher

    @property
    def fetcher(self) -> ResilientFetcher:
        if self._fetcher is None:
            self._fetcher = ResilientFetcher()
        return self._fetcher

    async def _fetch(
        self,
        url: str,
        target: ScanTarget,
        options: ScanOptions,
    ) -> FetchResult:
        """Fetch ``url``, reporting failures as ScanError."""
        try:
            return await self.fetcher.fetch(url, timeout=options.timeout_seconds)
        except ReconError as e:
            raise self._wrap_error(e, target) from e
