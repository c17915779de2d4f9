"""
ORACLE - Opportunity Detector

Derives cross-venue arbitrage candidates from a quote set.
"""

import time
from collections import defaultdict

from sati import ExecutionCostModel
from seraph.asset_classes import AssetClassRegistry
from shared import ComponentLogger, Opportunity, Quote, meets_minimum, normalize_source


class OpportunityDetector:
    """
    Detects price gaps between venues for the same asset.

    Quotes are grouped by base asset. Within a group the cheapest quote is
    the buy side and the most expensive quote from a different venue is the
    sell side. A candidate survives only if its gross edge meets the asset
    class minimum and its modeled net profit is strictly positive.
    """

    def __init__(
        self,
        registry: AssetClassRegistry | None = None,
        cost_model: ExecutionCostModel | None = None,
        trade_amount_usd: float = 10000.0,
    ):
        if trade_amount_usd <= 0:
            raise ValueError("trade_amount_usd must be positive")

        self.logger = ComponentLogger("ORACLE-DETECTOR")
        self.registry = registry or AssetClassRegistry()
        self.cost_model = cost_model or ExecutionCostModel()
        self.trade_amount_usd = trade_amount_usd

        # Statistics
        self.scans = 0
        self.groups_checked = 0
        self.opportunities_found = 0
        self.below_threshold = 0
        self.unprofitable = 0
        self.group_errors = 0

        self.logger.info(
            "Opportunity detector initialized",
            trade_amount_usd=trade_amount_usd,
        )

    def detect(self, quotes: list[Quote]) -> list[Opportunity]:
        """Produce zero or more candidates (unordered)."""
        start_time = time.time()
        self.scans += 1

        if not quotes:
            return []

        # Flat cost, once per pass
        estimated_cost = self.cost_model.estimate().cost_usd

        opportunities = []
        for asset, group in group_by_asset(quotes).items():
            self.groups_checked += 1
            try:
                opportunity = self._evaluate_group(asset, group, estimated_cost)
            except Exception:
                self.group_errors += 1
                self.logger.exception("Group evaluation failed", asset=asset)
                continue

            if opportunity is None:
                continue

            opportunities.append(opportunity)
            self.opportunities_found += 1

        scan_time_ms = (time.time() - start_time) * 1000
        self.logger.debug(
            "Detection completed",
            quotes=len(quotes),
            opportunities_found=len(opportunities),
            scan_time_ms=round(scan_time_ms, 2),
        )

        return opportunities

    def _evaluate_group(
        self,
        asset: str,
        group: list[Quote],
        estimated_cost: float,
    ) -> Opportunity | None:
        """
        Best candidate for one asset, or None.

        If the most expensive quote comes from the buy venue, the sell side
        falls back to the most expensive quote from any other venue; the
        asset is dropped only when every quote shares one venue.
        """
        if len(group) < 2:
            return None

        ordered = sorted(group, key=lambda q: q.price)
        buy = ordered[0]
        buy_venue = normalize_source(buy.source)

        sell = next(
            (q for q in reversed(ordered) if normalize_source(q.source) != buy_venue),
            None,
        )
        if sell is None:
            # Single venue, nothing to arbitrage
            return None

        price_difference = sell.price - buy.price
        gross_profit_pct = price_difference / buy.price * 100

        profile = self.registry.lookup(asset)
        if not meets_minimum(gross_profit_pct, profile.min_profit_pct):
            self.below_threshold += 1
            return None

        net_profit = self.trade_amount_usd * gross_profit_pct / 100 - estimated_cost
        if net_profit <= 0:
            self.unprofitable += 1
            return None

        return Opportunity(
            asset=asset,
            buy_source=buy.source,
            sell_source=sell.source,
            buy_price=buy.price,
            sell_price=sell.price,
            price_difference=price_difference,
            gross_profit_pct=gross_profit_pct,
            estimated_cost=estimated_cost,
            net_profit=net_profit,
            observed_at_ms=max(buy.observed_at_ms, sell.observed_at_ms),
            buy_volume_24h=buy.volume_24h,
            sell_volume_24h=sell.volume_24h,
        )

    def get_stats(self) -> dict:
        """Get detector statistics."""
        return {
            "scans": self.scans,
            "groups_checked": self.groups_checked,
            "opportunities_found": self.opportunities_found,
            "below_threshold": self.below_threshold,
            "unprofitable": self.unprofitable,
            "group_errors": self.group_errors,
            "hit_rate": self.opportunities_found / max(1, self.groups_checked),
        }


def group_by_asset(quotes: list[Quote]) -> dict[str, list[Quote]]:
    """Group quotes by normalized base asset, preserving input order."""
    groups: dict[str, list[Quote]] = defaultdict(list)
    for quote in quotes:
        asset = quote.asset
        if asset:
            groups[asset].append(quote)
    return dict(groups)
