"""
TRAINMAN - Source Adapter base classes

Adapters carry prices from outside venues into the pipeline. An adapter
never raises out of `fetch`: any failure is logged and yields no quotes.
"""

import asyncio
import time
from abc import ABC, abstractmethod
from typing import Any

import aiohttp

from shared import ComponentLogger, Quote


def now_ms() -> int:
    return int(time.time() * 1000)


class SourceAdapter(ABC):
    """Fetches quotes for a set of assets from one external price source."""

    name: str = "source"

    def __init__(self, request_timeout_ms: int = 10000):
        self.logger = ComponentLogger(f"TRAINMAN-{self.name.upper()}")
        self.request_timeout_ms = request_timeout_ms

        # Statistics
        self.fetches = 0
        self.failures = 0
        self.quotes_returned = 0

    @abstractmethod
    async def fetch(self, assets: list[str]) -> list[Quote]:
        """Return zero or more quotes for `assets`. Never raises."""

    def _open_session(self) -> aiohttp.ClientSession:
        timeout = aiohttp.ClientTimeout(total=self.request_timeout_ms / 1000)
        return aiohttp.ClientSession(timeout=timeout)

    async def _get_json(
        self,
        session: aiohttp.ClientSession,
        url: str,
        params: dict[str, str] | None = None,
    ) -> Any:
        async with session.get(url, params=params) as response:
            response.raise_for_status()
            return await response.json(content_type=None)

    def _record(self, quotes: list[Quote]) -> list[Quote]:
        self.fetches += 1
        self.quotes_returned += len(quotes)
        return quotes

    def _record_failure(self, error: Exception) -> list[Quote]:
        self.fetches += 1
        self.failures += 1
        self.logger.warning(
            "Source fetch failed",
            adapter=self.name,
            error=str(error) or type(error).__name__,
        )
        return []

    def get_stats(self) -> dict:
        """Get adapter statistics."""
        return {
            "adapter": self.name,
            "fetches": self.fetches,
            "failures": self.failures,
            "quotes_returned": self.quotes_returned,
        }


class BatchedSourceAdapter(SourceAdapter):
    """
    Adapter that issues one request per asset against a rate-limited venue.

    Assets are split into fixed-size batches. Requests inside a batch run
    concurrently; batches run one after another with a fixed delay between
    them, which bounds in-flight requests and respects the venue's limit.
    """

    def __init__(
        self,
        batch_size: int = 5,
        batch_delay_ms: int = 1000,
        request_timeout_ms: int = 10000,
    ):
        super().__init__(request_timeout_ms=request_timeout_ms)
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.batch_size = batch_size
        self.batch_delay_ms = batch_delay_ms

    async def fetch(self, assets: list[str]) -> list[Quote]:
        if not assets:
            return self._record([])

        try:
            async with self._open_session() as session:
                quotes = await self._fetch_batches(session, assets)
        except Exception as e:
            return self._record_failure(e)

        return self._record(quotes)

    async def _fetch_batches(
        self,
        session: aiohttp.ClientSession,
        assets: list[str],
    ) -> list[Quote]:
        quotes: list[Quote] = []
        batches = [
            assets[i:i + self.batch_size]
            for i in range(0, len(assets), self.batch_size)
        ]

        for index, batch in enumerate(batches):
            if index > 0 and self.batch_delay_ms > 0:
                await asyncio.sleep(self.batch_delay_ms / 1000)

            results = await asyncio.gather(
                *(self._fetch_asset(session, asset) for asset in batch),
                return_exceptions=True,
            )

            for asset, result in zip(batch, results):
                if isinstance(result, Exception):
                    self.logger.warning(
                        "Asset fetch failed",
                        adapter=self.name,
                        asset=asset,
                        error=str(result) or type(result).__name__,
                    )
                    continue
                if isinstance(result, BaseException):
                    raise result
                quotes.extend(result)

        return quotes

    @abstractmethod
    async def _fetch_asset(
        self,
        session: aiohttp.ClientSession,
        asset: str,
    ) -> list[Quote]:
        """Fetch quotes for a single asset. May raise; failures are isolated."""
