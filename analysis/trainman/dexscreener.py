"""
TRAINMAN - DexScreener adapter

One search request per asset; every DEX pair becomes a quote whose
source is the pair's DEX.
"""

from typing import Any

import aiohttp

from rama_kandra import LiquidityScreen, PairListing
from shared import Quote

from .base import BatchedSourceAdapter, now_ms

DEXSCREENER_SEARCH_URL = "https://api.dexscreener.com/latest/dex/search"


def _as_float(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class DexScreenerAdapter(BatchedSourceAdapter):
    """Fan-out adapter over the DexScreener pair search API."""

    name = "dexscreener"

    def __init__(
        self,
        screen: LiquidityScreen | None = None,
        base_url: str = DEXSCREENER_SEARCH_URL,
        batch_size: int = 5,
        batch_delay_ms: int = 1000,
        request_timeout_ms: int = 10000,
    ):
        super().__init__(
            batch_size=batch_size,
            batch_delay_ms=batch_delay_ms,
            request_timeout_ms=request_timeout_ms,
        )
        self.screen = screen or LiquidityScreen()
        self.base_url = base_url

    async def _fetch_asset(
        self,
        session: aiohttp.ClientSession,
        asset: str,
    ) -> list[Quote]:
        payload = await self._get_json(session, self.base_url, params={"q": asset})
        listings = self.parse_pairs(payload)
        kept = self.screen.screen(asset, listings)

        observed_at_ms = now_ms()
        return [listing.to_quote(observed_at_ms) for listing in kept]

    def parse_pairs(self, payload: Any) -> list[PairListing]:
        """Parse a search response, skipping malformed pairs."""
        if not isinstance(payload, dict):
            raise ValueError("unexpected DexScreener payload")

        listings = []
        for pair in payload.get("pairs") or []:
            if not isinstance(pair, dict):
                continue

            base = pair.get("baseToken") or {}
            quote = pair.get("quoteToken") or {}
            price = _as_float(pair.get("priceUsd"))
            dex_id = pair.get("dexId")
            if price is None or not dex_id or not base.get("symbol"):
                continue

            liquidity = _as_float((pair.get("liquidity") or {}).get("usd")) or 0.0
            volume = _as_float((pair.get("volume") or {}).get("h24")) or 0.0

            listings.append(PairListing(
                venue=str(dex_id),
                base_symbol=str(base["symbol"]),
                quote_symbol=str(quote.get("symbol") or "USD"),
                price_usd=price,
                liquidity_usd=liquidity,
                volume_24h_usd=volume,
                chain=pair.get("chainId"),
            ))

        return listings
