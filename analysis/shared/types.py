"""
Shared types for arbscan analysis agents.
"""

from dataclasses import dataclass, field
from enum import Enum

from .normalize import normalize_asset


class AssetCategory(str, Enum):
    """Coarse asset classes driving class-specific thresholds."""
    STABLECOIN = "stablecoin"
    MAJOR_CRYPTO = "major_crypto"
    DEFI = "defi"
    LAYER1 = "layer1"
    LAYER2 = "layer2"
    INFRASTRUCTURE = "infrastructure"
    ALTCOIN = "altcoin"
    UNKNOWN = "unknown"


class Confidence(str, Enum):
    """Coarse confidence tier of an opportunity."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Recommendation(str, Enum):
    """Anomaly filter verdict."""
    ACCEPT = "accept"
    CAUTION = "caution"
    REJECT = "reject"


@dataclass(frozen=True)
class Quote:
    """One observed price at one source for one asset."""
    source: str
    asset_pair: str  # e.g. "ETH/USD"
    price: float  # USD
    volume_24h: float  # USD
    observed_at_ms: int

    @property
    def asset(self) -> str:
        """Normalized base asset symbol."""
        return normalize_asset(self.asset_pair)


@dataclass(frozen=True)
class ValidationResult:
    """Anomaly filter outcome for one candidate."""
    valid: bool
    reason: str
    score: float  # 0-100
    recommendation: Recommendation


@dataclass(frozen=True)
class Opportunity:
    """Cross-source price gap with computed profitability."""
    asset: str
    buy_source: str
    sell_source: str
    buy_price: float
    sell_price: float
    price_difference: float
    gross_profit_pct: float
    estimated_cost: float  # USD
    net_profit: float  # USD, at the configured trade size
    observed_at_ms: int
    buy_volume_24h: float = 0.0
    sell_volume_24h: float = 0.0
    confidence: Confidence = Confidence.LOW
    validation: ValidationResult | None = None

    def to_dict(self) -> dict:
        """Plain representation for the serving layer."""
        data = {
            "asset": self.asset,
            "buy_source": self.buy_source,
            "sell_source": self.sell_source,
            "buy_price": self.buy_price,
            "sell_price": self.sell_price,
            "price_difference": self.price_difference,
            "gross_profit_pct": round(self.gross_profit_pct, 4),
            "estimated_cost": round(self.estimated_cost, 2),
            "net_profit": round(self.net_profit, 2),
            "confidence": self.confidence.value,
            "observed_at_ms": self.observed_at_ms,
        }
        if self.validation is not None:
            data["validation"] = {
                "valid": self.validation.valid,
                "reason": self.validation.reason,
                "score": round(self.validation.score, 1),
                "recommendation": self.validation.recommendation.value,
            }
        return data


@dataclass(frozen=True)
class FilterReport:
    """Per-batch outcome of the anomaly filter."""
    total: int
    accepted: int
    cautioned: int
    rejected: int  # every non-accepted candidate
    efficiency_pct: float  # rejected / total * 100
    results: tuple[tuple[Opportunity, ValidationResult], ...] = field(default=())
    accepted_opportunities: tuple[Opportunity, ...] = field(default=())
