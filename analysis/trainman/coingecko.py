"""
TRAINMAN - CoinGecko adapter

A single simple-price request covers every mapped asset.
"""

from typing import Any

from shared import Quote, normalize_asset

from .base import SourceAdapter, now_ms

COINGECKO_PRICE_URL = "https://api.coingecko.com/api/v3/simple/price"

COIN_IDS = {
    "BTC": "bitcoin",
    "WBTC": "wrapped-bitcoin",
    "ETH": "ethereum",
    "WETH": "weth",
    "BNB": "binancecoin",
    "USDC": "usd-coin",
    "USDT": "tether",
    "DAI": "dai",
    "FRAX": "frax",
    "UNI": "uniswap",
    "AAVE": "aave",
    "COMP": "compound-governance-token",
    "MKR": "maker",
    "CRV": "curve-dao-token",
    "SUSHI": "sushi",
    "LINK": "chainlink",
    "GRT": "the-graph",
    "SOL": "solana",
    "AVAX": "avalanche-2",
    "DOT": "polkadot",
    "ATOM": "cosmos",
    "ARB": "arbitrum",
    "OP": "optimism",
    "MATIC": "matic-network",
    "DOGE": "dogecoin",
}


class CoinGeckoAdapter(SourceAdapter):
    """Batch price lookup against CoinGecko."""

    name = "coingecko"

    def __init__(
        self,
        base_url: str = COINGECKO_PRICE_URL,
        coin_ids: dict[str, str] | None = None,
        request_timeout_ms: int = 10000,
    ):
        super().__init__(request_timeout_ms=request_timeout_ms)
        self.base_url = base_url
        self.coin_ids = coin_ids or COIN_IDS

    async def fetch(self, assets: list[str]) -> list[Quote]:
        ids = {
            self.coin_ids[symbol]: symbol
            for symbol in (normalize_asset(a) for a in assets)
            if symbol in self.coin_ids
        }
        if not ids:
            return self._record([])

        params = {
            "ids": ",".join(sorted(ids)),
            "vs_currencies": "usd",
            "include_24hr_vol": "true",
        }
        try:
            async with self._open_session() as session:
                payload = await self._get_json(session, self.base_url, params=params)
            quotes = self.parse_prices(payload, ids)
        except Exception as e:
            return self._record_failure(e)

        return self._record(quotes)

    def parse_prices(self, payload: Any, ids: dict[str, str]) -> list[Quote]:
        """Convert a simple-price response into quotes."""
        if not isinstance(payload, dict):
            raise ValueError("unexpected CoinGecko payload")

        observed_at_ms = now_ms()
        quotes = []
        for coin_id, symbol in ids.items():
            entry = payload.get(coin_id)
            if not isinstance(entry, dict) or entry.get("usd") is None:
                continue
            try:
                price = float(entry["usd"])
                volume = float(entry.get("usd_24h_vol") or 0.0)
            except (TypeError, ValueError):
                continue

            quotes.append(Quote(
                source=self.name,
                asset_pair=f"{symbol}/USD",
                price=price,
                volume_24h=volume,
                observed_at_ms=observed_at_ms,
            ))

        return quotes
