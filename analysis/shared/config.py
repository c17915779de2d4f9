"""
Configuration management for arbscan analysis agents.
"""

import os
from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from .types import AssetCategory


class MonitoringConfig(BaseModel):
    """Logging configuration."""
    log_level: str = "INFO"
    json_logs: bool = False


class AggregatorConfig(BaseModel):
    """Quote collection configuration."""
    batch_size: int = Field(default=5, ge=1)
    batch_delay_ms: int = Field(default=1000, ge=0)
    adapter_timeout_ms: int = 20000
    request_timeout_ms: int = 10000
    min_liquidity_usd: float = 10000.0
    max_pairs_per_asset: int = Field(default=3, ge=1)
    staleness_threshold_ms: int = 300000


class CostConfig(BaseModel):
    """Flat execution cost assumptions (not live gas telemetry)."""
    gas_price_gwei: float = 30.0
    gas_limit: int = 300000  # complex swap
    reference_price_usd: float = 3000.0  # ETH


class ScoringConfig(BaseModel):
    """Confidence scorer policy."""
    # (minimum gross profit pct, points), checked highest first
    profit_bands: list[tuple[float, int]] = Field(
        default_factory=lambda: [(5.0, 3), (2.0, 2), (1.0, 1)]
    )
    # (minimum 24h volume on each side, points), checked highest first
    volume_bands: list[tuple[float, int]] = Field(
        default_factory=lambda: [(100000.0, 2), (10000.0, 1)]
    )
    reputable_sources: list[str] = Field(
        default_factory=lambda: [
            "binance", "coinbase", "kraken", "okx", "bybit",
            "uniswap", "sushiswap", "curve", "balancer", "1inch",
            "pancakeswap", "coingecko",
        ]
    )
    reputation_points: int = 1
    high_threshold: int = 4
    medium_threshold: int = 2


class FilterConfig(BaseModel):
    """Anomaly filter policy."""
    accept_score: float = 70.0
    caution_score: float = 40.0
    stablecoin_peg: float = 1.0
    stablecoin_max_deviation_pct: float = 5.0
    profit_score_max: float = 40.0
    blacklisted_sources: list[str] = Field(
        default_factory=lambda: ["unknown", "testnet", "honeypot", "scamswap"]
    )
    source_reputation: dict[str, float] = Field(
        default_factory=lambda: {
            "binance": 20.0,
            "coinbase": 20.0,
            "kraken": 18.0,
            "uniswap": 18.0,
            "okx": 16.0,
            "curve": 16.0,
            "bybit": 15.0,
            "sushiswap": 15.0,
            "1inch": 15.0,
            "coingecko": 15.0,
            "balancer": 14.0,
            "pancakeswap": 14.0,
            "kucoin": 12.0,
        }
    )
    default_source_reputation: float = 8.0


class ClassPolicy(BaseModel):
    """Thresholds and scoring parameters for one asset class."""
    min_profit_pct: float
    max_profit_pct: float
    sweet_spot_min_pct: float
    sweet_spot_max_pct: float
    score_bonus: float = 0.0


def _default_policies() -> dict[AssetCategory, ClassPolicy]:
    return {
        AssetCategory.STABLECOIN: ClassPolicy(
            min_profit_pct=0.1, max_profit_pct=5.0,
            sweet_spot_min_pct=0.1, sweet_spot_max_pct=1.0, score_bonus=20.0,
        ),
        AssetCategory.MAJOR_CRYPTO: ClassPolicy(
            min_profit_pct=0.5, max_profit_pct=25.0,
            sweet_spot_min_pct=0.5, sweet_spot_max_pct=5.0, score_bonus=15.0,
        ),
        AssetCategory.DEFI: ClassPolicy(
            min_profit_pct=1.0, max_profit_pct=50.0,
            sweet_spot_min_pct=1.0, sweet_spot_max_pct=10.0, score_bonus=10.0,
        ),
        AssetCategory.LAYER1: ClassPolicy(
            min_profit_pct=1.0, max_profit_pct=100.0,
            sweet_spot_min_pct=1.0, sweet_spot_max_pct=15.0, score_bonus=8.0,
        ),
        AssetCategory.LAYER2: ClassPolicy(
            min_profit_pct=1.5, max_profit_pct=100.0,
            sweet_spot_min_pct=1.5, sweet_spot_max_pct=15.0, score_bonus=8.0,
        ),
        AssetCategory.INFRASTRUCTURE: ClassPolicy(
            min_profit_pct=2.0, max_profit_pct=150.0,
            sweet_spot_min_pct=2.0, sweet_spot_max_pct=20.0, score_bonus=5.0,
        ),
        AssetCategory.ALTCOIN: ClassPolicy(
            min_profit_pct=5.0, max_profit_pct=200.0,
            sweet_spot_min_pct=5.0, sweet_spot_max_pct=30.0, score_bonus=0.0,
        ),
    }


class AssetClassConfig(BaseModel):
    """Per-class policies plus the fallback for unclassified symbols."""
    policies: dict[AssetCategory, ClassPolicy] = Field(default_factory=_default_policies)
    default_policy: ClassPolicy = Field(
        default_factory=lambda: ClassPolicy(
            min_profit_pct=5.0, max_profit_pct=200.0,
            sweet_spot_min_pct=5.0, sweet_spot_max_pct=30.0, score_bonus=0.0,
        )
    )

    def policy_for(self, category: AssetCategory) -> ClassPolicy:
        """Policy for a category, falling back to the global default."""
        return self.policies.get(category, self.default_policy)


class ArbscanConfig(BaseSettings):
    """Main arbscan configuration."""

    model_config = {"env_prefix": "ARBSCAN_", "env_nested_delimiter": "__"}

    # Environment
    environment: str = Field(default="development")

    # Cycle
    assets: list[str] = Field(
        default_factory=lambda: [
            "ETH", "BTC", "USDC", "USDT", "DAI", "UNI", "AAVE",
            "LINK", "ARB", "OP", "SOL", "MATIC",
        ]
    )
    trade_amount_usd: float = Field(default=10000.0, gt=0)
    update_interval_s: float = Field(default=60.0, gt=0)
    filter_enabled: bool = Field(default=True)

    # Components
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)
    aggregator: AggregatorConfig = Field(default_factory=AggregatorConfig)
    cost: CostConfig = Field(default_factory=CostConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    filter: FilterConfig = Field(default_factory=FilterConfig)
    asset_classes: AssetClassConfig = Field(default_factory=AssetClassConfig)

    # Sources
    dexscreener_url: str = Field(default="https://api.dexscreener.com/latest/dex/search")
    coingecko_url: str = Field(default="https://api.coingecko.com/api/v3/simple/price")
    coingecko_enabled: bool = Field(default=True)

    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == "development"


@lru_cache
def get_config() -> ArbscanConfig:
    """Get cached configuration instance."""
    # Load .env file if present
    from dotenv import load_dotenv
    load_dotenv()

    return ArbscanConfig()


def require_env(name: str) -> str:
    """Get required environment variable."""
    value = os.environ.get(name)
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def get_env(name: str, default: str = "") -> str:
    """Get optional environment variable with default."""
    return os.environ.get(name, default)
