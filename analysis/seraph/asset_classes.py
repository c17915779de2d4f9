"""
SERAPH - Asset Class Profiles

Static reference data: plausible price band and category per symbol.
Category thresholds come from `AssetClassConfig`.
"""

from dataclasses import dataclass

from shared import AssetCategory, AssetClassConfig, ClassPolicy, normalize_asset

# symbol -> (category, min plausible USD price, max plausible USD price)
ASSET_PROFILES: dict[str, tuple[AssetCategory, float, float]] = {
    # Stablecoins (wide band; the peg check is stricter)
    "USDC": (AssetCategory.STABLECOIN, 0.5, 1.5),
    "USDT": (AssetCategory.STABLECOIN, 0.5, 1.5),
    "DAI": (AssetCategory.STABLECOIN, 0.5, 1.5),
    "BUSD": (AssetCategory.STABLECOIN, 0.5, 1.5),
    "FRAX": (AssetCategory.STABLECOIN, 0.5, 1.5),
    "TUSD": (AssetCategory.STABLECOIN, 0.5, 1.5),
    "USDP": (AssetCategory.STABLECOIN, 0.5, 1.5),
    "LUSD": (AssetCategory.STABLECOIN, 0.5, 1.5),
    # Majors and bitcoin-pegged
    "BTC": (AssetCategory.MAJOR_CRYPTO, 10_000, 250_000),
    "WBTC": (AssetCategory.MAJOR_CRYPTO, 10_000, 250_000),
    "ETH": (AssetCategory.MAJOR_CRYPTO, 500, 20_000),
    "WETH": (AssetCategory.MAJOR_CRYPTO, 500, 20_000),
    "BNB": (AssetCategory.MAJOR_CRYPTO, 50, 3_000),
    # DeFi
    "UNI": (AssetCategory.DEFI, 1, 100),
    "AAVE": (AssetCategory.DEFI, 10, 1_000),
    "COMP": (AssetCategory.DEFI, 5, 1_000),
    "MKR": (AssetCategory.DEFI, 100, 10_000),
    "CRV": (AssetCategory.DEFI, 0.05, 20),
    "SUSHI": (AssetCategory.DEFI, 0.1, 50),
    # Layer 1
    "SOL": (AssetCategory.LAYER1, 1, 1_000),
    "AVAX": (AssetCategory.LAYER1, 1, 500),
    "ADA": (AssetCategory.LAYER1, 0.05, 10),
    "DOT": (AssetCategory.LAYER1, 1, 200),
    "ATOM": (AssetCategory.LAYER1, 1, 200),
    "NEAR": (AssetCategory.LAYER1, 0.5, 100),
    # Layer 2
    "MATIC": (AssetCategory.LAYER2, 0.05, 10),
    "POL": (AssetCategory.LAYER2, 0.05, 10),
    "ARB": (AssetCategory.LAYER2, 0.1, 20),
    "OP": (AssetCategory.LAYER2, 0.1, 30),
    "IMX": (AssetCategory.LAYER2, 0.1, 30),
    # Infrastructure
    "LINK": (AssetCategory.INFRASTRUCTURE, 1, 200),
    "GRT": (AssetCategory.INFRASTRUCTURE, 0.01, 10),
    "FIL": (AssetCategory.INFRASTRUCTURE, 0.5, 300),
    "RNDR": (AssetCategory.INFRASTRUCTURE, 0.1, 100),
    # Altcoins
    "DOGE": (AssetCategory.ALTCOIN, 0.01, 2),
    "SHIB": (AssetCategory.ALTCOIN, 1e-6, 1e-3),
    "PEPE": (AssetCategory.ALTCOIN, 1e-8, 1e-4),
    "XRP": (AssetCategory.ALTCOIN, 0.1, 20),
    "LTC": (AssetCategory.ALTCOIN, 10, 1_000),
}


@dataclass(frozen=True)
class AssetClassProfile:
    """Resolved class profile for one symbol."""
    symbol: str
    category: AssetCategory
    price_min: float | None
    price_max: float | None
    policy: ClassPolicy

    @property
    def is_classified(self) -> bool:
        return self.category != AssetCategory.UNKNOWN

    @property
    def is_stablecoin(self) -> bool:
        return self.category == AssetCategory.STABLECOIN

    @property
    def min_profit_pct(self) -> float:
        return self.policy.min_profit_pct

    @property
    def max_profit_pct(self) -> float:
        return self.policy.max_profit_pct

    @property
    def score_bonus(self) -> float:
        return self.policy.score_bonus

    def in_range(self, price: float) -> bool:
        """True when the price lies in the band; unclassified symbols always pass."""
        if not self.is_classified:
            return True
        return self.price_min <= price <= self.price_max


class AssetClassRegistry:
    """Case-insensitive symbol -> class profile lookup."""

    def __init__(
        self,
        config: AssetClassConfig | None = None,
        profiles: dict[str, tuple[AssetCategory, float, float]] | None = None,
    ):
        self.config = config or AssetClassConfig()
        source = ASSET_PROFILES if profiles is None else profiles
        self.profiles = {normalize_asset(symbol): entry for symbol, entry in source.items()}

    def lookup(self, symbol: str) -> AssetClassProfile:
        """Resolve a symbol; unmapped symbols get the UNKNOWN category and default policy."""
        key = normalize_asset(symbol)
        entry = self.profiles.get(key)
        if entry is None:
            return AssetClassProfile(
                symbol=key,
                category=AssetCategory.UNKNOWN,
                price_min=None,
                price_max=None,
                policy=self.config.default_policy,
            )

        category, price_min, price_max = entry
        return AssetClassProfile(
            symbol=key,
            category=category,
            price_min=float(price_min),
            price_max=float(price_max),
            policy=self.config.policy_for(category),
        )

    def category_of(self, symbol: str) -> AssetCategory:
        return self.lookup(symbol).category
