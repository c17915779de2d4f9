"""Tests for the Rama-Kandra liquidity screen."""

import pytest

from rama_kandra.liquidity import LiquidityScreen, PairListing


def _listing(venue, symbol="ETH", liquidity=50_000.0, price=3000.0, quote="USDC"):
    return PairListing(
        venue=venue,
        base_symbol=symbol,
        quote_symbol=quote,
        price_usd=price,
        liquidity_usd=liquidity,
        volume_24h_usd=75_000.0,
        chain="ethereum",
    )


class TestLiquidityScreen:
    """Test suite for LiquidityScreen."""

    def test_initialization(self):
        """Test screen initializes correctly."""
        screen = LiquidityScreen()
        assert screen.min_liquidity_usd == 10000
        assert screen.max_pairs_per_asset == 3
        assert screen.get_stats()["screened"] == 0

    def test_invalid_cap(self):
        """Test the per-asset cap must be positive."""
        with pytest.raises(ValueError):
            LiquidityScreen(max_pairs_per_asset=0)

    def test_minimum_is_exclusive(self):
        """Test liquidity must be strictly above the minimum."""
        screen = LiquidityScreen(min_liquidity_usd=10_000)
        listings = [
            _listing("at", liquidity=10_000.0),
            _listing("above", liquidity=10_000.01),
            _listing("below", liquidity=500.0),
        ]

        kept = screen.screen("ETH", listings)

        assert [listing.venue for listing in kept] == ["above"]
        assert screen.get_stats()["rejected_illiquid"] == 2

    def test_most_liquid_first_and_capped(self):
        """Test ordering by liquidity and the per-asset cap."""
        screen = LiquidityScreen(max_pairs_per_asset=2)
        listings = [
            _listing("small", liquidity=20_000.0),
            _listing("huge", liquidity=5_000_000.0),
            _listing("mid", liquidity=300_000.0),
        ]

        kept = screen.screen("ETH", listings)

        assert [listing.venue for listing in kept] == ["huge", "mid"]
        assert screen.get_stats()["trimmed"] == 1

    def test_other_symbols_ignored(self):
        """Test search noise for other tokens is dropped."""
        screen = LiquidityScreen()
        listings = [
            _listing("uniswap", symbol="eth"),
            _listing("uniswap", symbol="ETHFI"),
            _listing("uniswap", symbol="WETH"),
        ]

        kept = screen.screen("eth/usd", listings)

        assert len(kept) == 1
        assert screen.get_stats()["screened"] == 1

    def test_empty(self):
        """Test screening nothing."""
        assert LiquidityScreen().screen("ETH", []) == []


class TestPairListing:
    """Test suite for PairListing."""

    def test_to_quote(self):
        """Test conversion to a pipeline quote."""
        quote = _listing("Uniswap", symbol="eth", quote="usdc").to_quote(1_700_000_000_000)

        assert quote.source == "Uniswap"
        assert quote.asset_pair == "ETH/USDC"
        assert quote.asset == "ETH"
        assert quote.price == 3000.0
        assert quote.volume_24h == 75_000.0
        assert quote.observed_at_ms == 1_700_000_000_000
