"""
ORACLE - Quote Aggregator

Collects quotes from every source adapter for a batch of assets.
"""

import asyncio
import math
import time
from collections import defaultdict
from dataclasses import replace

from shared import ComponentLogger, Quote, is_usable_price
from trainman import SourceAdapter


class QuoteAggregator:
    """
    Runs all source adapters concurrently and merges their quotes.

    A failing or hanging adapter contributes nothing; it never aborts
    collection for the others. Quotes with unusable prices or older than
    the staleness threshold are discarded at ingestion.
    """

    def __init__(
        self,
        adapters: list[SourceAdapter],
        adapter_timeout_ms: int = 20000,
        staleness_threshold_ms: int = 300000,
    ):
        self.logger = ComponentLogger("ORACLE-AGGREGATOR")
        self.adapters = list(adapters)
        self.adapter_timeout_ms = adapter_timeout_ms
        self.staleness_threshold_ms = staleness_threshold_ms

        # Statistics
        self.collections = 0
        self.quotes_accepted = 0
        self.quotes_discarded = 0
        self.adapter_failures: dict[str, int] = defaultdict(int)

        self.logger.info(
            "Quote aggregator initialized",
            adapters=[adapter.name for adapter in self.adapters],
            adapter_timeout_ms=adapter_timeout_ms,
        )

    async def collect(self, assets: list[str]) -> list[Quote]:
        """Collect the union of all obtainable quotes for `assets`."""
        self.collections += 1
        if not assets or not self.adapters:
            return []

        results = await asyncio.gather(
            *(self._run_adapter(adapter, assets) for adapter in self.adapters)
        )

        collected_at_ms = int(time.time() * 1000)
        quotes = []
        for adapter_quotes in results:
            quotes.extend(self._ingest(adapter_quotes, collected_at_ms))

        self.logger.debug(
            "Collection completed",
            assets=len(assets),
            quotes=len(quotes),
            sources=len({q.source for q in quotes}),
        )
        return quotes

    async def _run_adapter(self, adapter: SourceAdapter, assets: list[str]) -> list[Quote]:
        try:
            quotes = await asyncio.wait_for(
                adapter.fetch(list(assets)),
                timeout=self.adapter_timeout_ms / 1000,
            )
            return list(quotes or [])
        except asyncio.TimeoutError:
            self.adapter_failures[adapter.name] += 1
            self.logger.warning(
                "Adapter timed out",
                adapter=adapter.name,
                timeout_ms=self.adapter_timeout_ms,
            )
            return []
        except Exception as e:
            self.adapter_failures[adapter.name] += 1
            self.logger.warning(
                "Adapter failed",
                adapter=adapter.name,
                error=str(e) or type(e).__name__,
            )
            return []

    def _ingest(self, quotes: list[Quote], collected_at_ms: int) -> list[Quote]:
        accepted = []
        for quote in quotes:
            if not isinstance(quote, Quote) or not is_usable_price(quote.price):
                self.quotes_discarded += 1
                continue
            if collected_at_ms - quote.observed_at_ms > self.staleness_threshold_ms:
                self.quotes_discarded += 1
                continue
            if not _is_finite_non_negative(quote.volume_24h):
                quote = replace(quote, volume_24h=0.0)
            accepted.append(quote)

        self.quotes_accepted += len(accepted)
        return accepted

    def get_stats(self) -> dict:
        """Get aggregator statistics."""
        return {
            "collections": self.collections,
            "adapters": len(self.adapters),
            "quotes_accepted": self.quotes_accepted,
            "quotes_discarded": self.quotes_discarded,
            "adapter_failures": dict(self.adapter_failures),
        }


def _is_finite_non_negative(value) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and value >= 0
