"""Tests for asset class profiles."""

from seraph.asset_classes import AssetClassRegistry
from shared import AssetCategory, AssetClassConfig, ClassPolicy


class TestAssetClassRegistry:
    """Test suite for AssetClassRegistry."""

    def test_known_symbols(self):
        """Test well-known symbols resolve to their category."""
        registry = AssetClassRegistry()

        assert registry.category_of("USDC") == AssetCategory.STABLECOIN
        assert registry.category_of("ETH") == AssetCategory.MAJOR_CRYPTO
        assert registry.category_of("AAVE") == AssetCategory.DEFI
        assert registry.category_of("SOL") == AssetCategory.LAYER1
        assert registry.category_of("ARB") == AssetCategory.LAYER2
        assert registry.category_of("LINK") == AssetCategory.INFRASTRUCTURE
        assert registry.category_of("DOGE") == AssetCategory.ALTCOIN

    def test_lookup_is_case_insensitive(self):
        """Test lookup accepts lower case and pair notation."""
        registry = AssetClassRegistry()

        profile = registry.lookup("eth/usd")

        assert profile.symbol == "ETH"
        assert profile.category == AssetCategory.MAJOR_CRYPTO
        assert profile.price_min == 500.0

    def test_unknown_symbol(self):
        """Test unmapped symbols get the default policy and no band."""
        registry = AssetClassRegistry()

        profile = registry.lookup("NOTACOIN")

        assert profile.category == AssetCategory.UNKNOWN
        assert not profile.is_classified
        assert profile.in_range(1e12)
        assert profile.min_profit_pct == 5.0
        assert profile.max_profit_pct == 200.0
        assert profile.score_bonus == 0.0

    def test_in_range(self):
        """Test price band bounds are inclusive."""
        profile = AssetClassRegistry().lookup("USDC")

        assert profile.in_range(0.5)
        assert profile.in_range(1.5)
        assert not profile.in_range(0.49)
        assert not profile.in_range(1.51)

    def test_class_thresholds(self):
        """Test tighter classes have tighter minimums and ceilings."""
        registry = AssetClassRegistry()

        stable = registry.lookup("USDT")
        major = registry.lookup("BTC")
        alt = registry.lookup("PEPE")

        assert stable.min_profit_pct < major.min_profit_pct < alt.min_profit_pct
        assert stable.max_profit_pct < major.max_profit_pct < alt.max_profit_pct
        assert stable.is_stablecoin

    def test_custom_policy(self):
        """Test class policies are configurable."""
        config = AssetClassConfig(
            policies={
                AssetCategory.MAJOR_CRYPTO: ClassPolicy(
                    min_profit_pct=0.2, max_profit_pct=10.0,
                    sweet_spot_min_pct=0.2, sweet_spot_max_pct=2.0,
                ),
            },
        )
        registry = AssetClassRegistry(config)

        assert registry.lookup("ETH").min_profit_pct == 0.2
        # Categories missing from the mapping fall back to the default
        assert registry.lookup("USDC").min_profit_pct == 5.0

    def test_custom_profiles(self):
        """Test the symbol table can be replaced."""
        registry = AssetClassRegistry(
            profiles={"wif": (AssetCategory.ALTCOIN, 0.1, 10.0)},
        )

        assert registry.category_of("WIF") == AssetCategory.ALTCOIN
        assert registry.category_of("ETH") == AssetCategory.UNKNOWN
