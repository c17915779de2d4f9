"""
SATI - Execution Cost Model

Flat estimate of what executing one arbitrage would cost in gas.
"""

from dataclasses import dataclass

from shared import ComponentLogger, CostConfig

GWEI = 1e-9


@dataclass(frozen=True)
class CostEstimate:
    """Estimated execution cost for one complex swap."""
    gas_price_gwei: float
    gas_limit: int
    reference_price_usd: float
    cost_native: float  # ETH
    cost_usd: float


class ExecutionCostModel:
    """
    Coarse execution cost model.

    Uses a fixed gas price, a fixed gas limit for a complex swap and a
    fixed reference price for the gas asset. This is not live telemetry;
    the estimate only has to be good enough to drop spreads that a single
    swap would eat.
    """

    def __init__(
        self,
        gas_price_gwei: float = 30.0,
        gas_limit: int = 300_000,
        reference_price_usd: float = 3000.0,
    ):
        if gas_price_gwei < 0 or gas_limit < 0 or reference_price_usd < 0:
            raise ValueError("cost model parameters must be non-negative")

        self.logger = ComponentLogger("SATI-COST")
        self.gas_price_gwei = gas_price_gwei
        self.gas_limit = gas_limit
        self.reference_price_usd = reference_price_usd

        # Statistics
        self.estimates_made = 0

        self.logger.info(
            "Cost model initialized",
            gas_price_gwei=gas_price_gwei,
            gas_limit=gas_limit,
        )

    @classmethod
    def from_config(cls, config: CostConfig) -> "ExecutionCostModel":
        return cls(
            gas_price_gwei=config.gas_price_gwei,
            gas_limit=config.gas_limit,
            reference_price_usd=config.reference_price_usd,
        )

    def estimate(self) -> CostEstimate:
        """Estimate the cost of one execution."""
        cost_native = self.gas_price_gwei * GWEI * self.gas_limit
        self.estimates_made += 1

        return CostEstimate(
            gas_price_gwei=self.gas_price_gwei,
            gas_limit=self.gas_limit,
            reference_price_usd=self.reference_price_usd,
            cost_native=cost_native,
            cost_usd=cost_native * self.reference_price_usd,
        )

    def get_stats(self) -> dict:
        """Get cost model statistics."""
        return {
            "estimates_made": self.estimates_made,
            "gas_price_gwei": self.gas_price_gwei,
            "gas_limit": self.gas_limit,
            "reference_price_usd": self.reference_price_usd,
        }
