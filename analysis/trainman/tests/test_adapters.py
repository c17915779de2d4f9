"""Tests for the Trainman source adapters."""

import asyncio
import time

import pytest

from rama_kandra import LiquidityScreen
from shared import Quote
from trainman import (
    BatchedSourceAdapter,
    CoinGeckoAdapter,
    DexScreenerAdapter,
    StaticQuoteAdapter,
)


class NullSession:
    """Stands in for an aiohttp session; requests go through `_get_json`."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


def _pair(dex, symbol, price, liquidity=50_000.0, volume=120_000.0, quote="USDC"):
    return {
        "chainId": "ethereum",
        "dexId": dex,
        "baseToken": {"symbol": symbol},
        "quoteToken": {"symbol": quote},
        "priceUsd": str(price),
        "liquidity": {"usd": liquidity},
        "volume": {"h24": volume},
    }


class CannedDexScreener(DexScreenerAdapter):
    """DexScreener adapter answering from canned payloads."""

    def __init__(self, payloads, **kwargs):
        kwargs.setdefault("batch_delay_ms", 0)
        super().__init__(**kwargs)
        self.payloads = payloads
        self.requested = []

    def _open_session(self):
        return NullSession()

    async def _get_json(self, session, url, params=None):
        asset = params["q"]
        self.requested.append(asset)
        payload = self.payloads[asset]
        if isinstance(payload, Exception):
            raise payload
        return payload


class ProbeAdapter(BatchedSourceAdapter):
    """Records how many asset requests are in flight at once."""

    name = "probe"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.in_flight = 0
        self.max_in_flight = 0

    def _open_session(self):
        return NullSession()

    async def _fetch_asset(self, session, asset):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(0.01)
        self.in_flight -= 1
        return [Quote(
            source="probe",
            asset_pair=f"{asset}/USD",
            price=1.0,
            volume_24h=0.0,
            observed_at_ms=0,
        )]


class BrokenSessionAdapter(ProbeAdapter):
    """Cannot even open a session."""

    def _open_session(self):
        raise RuntimeError("no network")


class TestBatchedSourceAdapter:
    """Test suite for batched fan-out."""

    def test_invalid_batch_size(self):
        """Test batch size must be positive."""
        with pytest.raises(ValueError):
            ProbeAdapter(batch_size=0)

    @pytest.mark.asyncio
    async def test_in_flight_bounded_by_batch_size(self):
        """Test no more than batch_size requests run concurrently."""
        adapter = ProbeAdapter(batch_size=3, batch_delay_ms=0)
        assets = [f"A{i}" for i in range(8)]

        quotes = await adapter.fetch(assets)

        assert len(quotes) == 8
        assert adapter.max_in_flight == 3

    @pytest.mark.asyncio
    async def test_delay_between_batches(self):
        """Test batches are separated by the configured delay."""
        adapter = ProbeAdapter(batch_size=2, batch_delay_ms=50)
        assets = ["A", "B", "C", "D", "E"]  # 3 batches, 2 delays

        start = time.monotonic()
        await adapter.fetch(assets)
        elapsed = time.monotonic() - start

        assert elapsed >= 0.09

    @pytest.mark.asyncio
    async def test_session_failure_returns_empty(self):
        """Test a transport failure yields no quotes instead of raising."""
        adapter = BrokenSessionAdapter()

        quotes = await adapter.fetch(["ETH"])

        assert quotes == []
        assert adapter.get_stats()["failures"] == 1

    @pytest.mark.asyncio
    async def test_empty_assets(self):
        """Test fetching nothing."""
        adapter = ProbeAdapter()
        assert await adapter.fetch([]) == []


class TestDexScreenerAdapter:
    """Test suite for DexScreenerAdapter."""

    @pytest.mark.asyncio
    async def test_fetch_quotes(self):
        """Test pairs become quotes sourced from their DEX."""
        adapter = CannedDexScreener({
            "ETH": {"pairs": [
                _pair("uniswap", "WETH", 3000.0),
                _pair("uniswap", "ETH", 3001.5, liquidity=900_000.0),
                _pair("sushiswap", "ETH", 3010.0, liquidity=400_000.0),
            ]},
        })

        quotes = await adapter.fetch(["ETH"])

        assert [q.source for q in quotes] == ["uniswap", "sushiswap"]
        assert quotes[0].asset == "ETH"
        assert quotes[0].price == 3001.5
        assert quotes[0].volume_24h == 120_000.0

    @pytest.mark.asyncio
    async def test_illiquid_pairs_dropped(self):
        """Test pools at or under the liquidity minimum are discarded."""
        adapter = CannedDexScreener(
            {"UNI": {"pairs": [
                _pair("uniswap", "UNI", 10.0, liquidity=10_000.0),
                _pair("sushiswap", "UNI", 10.2, liquidity=10_001.0),
            ]}},
            screen=LiquidityScreen(min_liquidity_usd=10_000),
        )

        quotes = await adapter.fetch(["UNI"])

        assert [q.source for q in quotes] == ["sushiswap"]

    @pytest.mark.asyncio
    async def test_pairs_capped_per_asset(self):
        """Test only the most liquid pairs survive the cap."""
        pairs = [
            _pair(f"dex{i}", "ARB", 1.0 + i / 100, liquidity=20_000.0 * (i + 1))
            for i in range(5)
        ]
        adapter = CannedDexScreener(
            {"ARB": {"pairs": pairs}},
            screen=LiquidityScreen(max_pairs_per_asset=2),
        )

        quotes = await adapter.fetch(["ARB"])

        assert [q.source for q in quotes] == ["dex4", "dex3"]

    @pytest.mark.asyncio
    async def test_one_asset_failure_isolated(self):
        """Test a failing asset request does not lose the others."""
        adapter = CannedDexScreener({
            "ETH": {"pairs": [_pair("uniswap", "ETH", 3000.0)]},
            "BTC": RuntimeError("429 Too Many Requests"),
            "UNI": {"pairs": [_pair("uniswap", "UNI", 10.0)]},
        })

        quotes = await adapter.fetch(["ETH", "BTC", "UNI"])

        assert sorted(q.asset for q in quotes) == ["ETH", "UNI"]
        assert adapter.requested == ["ETH", "BTC", "UNI"]
        assert adapter.get_stats()["failures"] == 0

    def test_parse_skips_malformed_pairs(self):
        """Test pairs without price, venue or symbol are skipped."""
        adapter = DexScreenerAdapter()
        payload = {"pairs": [
            _pair("uniswap", "ETH", 3000.0),
            {"dexId": "uniswap", "baseToken": {"symbol": "ETH"}},
            {"priceUsd": "3000", "baseToken": {"symbol": "ETH"}},
            {"dexId": "curve", "priceUsd": "not-a-number", "baseToken": {"symbol": "ETH"}},
            "garbage",
        ]}

        listings = adapter.parse_pairs(payload)

        assert len(listings) == 1
        assert listings[0].venue == "uniswap"
        assert listings[0].chain == "ethereum"

    def test_parse_rejects_non_object(self):
        """Test a non-object payload is an error."""
        with pytest.raises(ValueError):
            DexScreenerAdapter().parse_pairs(["not", "a", "dict"])

    def test_parse_no_pairs(self):
        """Test a null pair list."""
        assert DexScreenerAdapter().parse_pairs({"pairs": None}) == []


class TestCoinGeckoAdapter:
    """Test suite for CoinGeckoAdapter."""

    def test_parse_prices(self):
        """Test simple-price response parsing."""
        adapter = CoinGeckoAdapter()
        payload = {
            "ethereum": {"usd": 3050.5, "usd_24h_vol": 1.5e10},
            "bitcoin": {"usd": 61000},
            "usd-coin": {"usd": None},
        }
        ids = {"ethereum": "ETH", "bitcoin": "BTC", "usd-coin": "USDC"}

        quotes = adapter.parse_prices(payload, ids)

        by_asset = {q.asset: q for q in quotes}
        assert set(by_asset) == {"ETH", "BTC"}
        assert by_asset["ETH"].source == "coingecko"
        assert by_asset["ETH"].volume_24h == 1.5e10
        assert by_asset["BTC"].volume_24h == 0.0

    def test_parse_rejects_non_object(self):
        """Test a non-object payload is an error."""
        with pytest.raises(ValueError):
            CoinGeckoAdapter().parse_prices("oops", {})

    @pytest.mark.asyncio
    async def test_unmapped_assets_skip_request(self):
        """Test no request is made when no asset has a coin id."""
        adapter = CoinGeckoAdapter()

        def fail():
            raise AssertionError("session should not be opened")

        adapter._open_session = fail

        assert await adapter.fetch(["NOTACOIN"]) == []

    @pytest.mark.asyncio
    async def test_fetch_single_request(self):
        """Test every mapped asset is covered by one request."""
        adapter = CoinGeckoAdapter()
        calls = []

        async def fake_get_json(session, url, params=None):
            calls.append(params)
            return {"ethereum": {"usd": 3000}, "bitcoin": {"usd": 60000}}

        adapter._open_session = NullSession
        adapter._get_json = fake_get_json

        quotes = await adapter.fetch(["ETH", "btc", "NOTACOIN"])

        assert len(calls) == 1
        assert calls[0]["ids"] == "bitcoin,ethereum"
        assert sorted(q.asset for q in quotes) == ["BTC", "ETH"]

    @pytest.mark.asyncio
    async def test_fetch_failure_returns_empty(self):
        """Test a request failure yields no quotes."""
        adapter = CoinGeckoAdapter()

        async def failing_get_json(session, url, params=None):
            raise RuntimeError("503")

        adapter._open_session = NullSession
        adapter._get_json = failing_get_json

        assert await adapter.fetch(["ETH"]) == []
        assert adapter.get_stats()["failures"] == 1


class TestStaticQuoteAdapter:
    """Test suite for StaticQuoteAdapter."""

    @pytest.mark.asyncio
    async def test_filters_requested_assets(self):
        """Test only requested assets are served."""
        quotes = [
            Quote("a", "ETH/USD", 3000.0, 0.0, 0),
            Quote("a", "BTC/USD", 60000.0, 0.0, 0),
        ]
        adapter = StaticQuoteAdapter(quotes, name="replay")

        served = await adapter.fetch(["btc"])

        assert [q.asset for q in served] == ["BTC"]
        assert adapter.get_stats()["adapter"] == "replay"
