"""
ORACLE - Confidence Scorer

Additive point system over profit, liquidity and venue reputation.
"""

from dataclasses import replace

from shared import ComponentLogger, Confidence, Opportunity, ScoringConfig, source_matches


class ConfidenceScorer:
    """
    Assigns a low/medium/high tier to each candidate.

    Points come from three factors: the gross profit band, the 24h volume
    band met by both sides, and whether both venues are on the reputable
    allow-list. High profit earns points here; implausibly high profit is
    the anomaly filter's concern.
    """

    def __init__(self, config: ScoringConfig | None = None):
        self.logger = ComponentLogger("ORACLE-SCORER")
        self.config = config or ScoringConfig()

        self.profit_bands = sorted(self.config.profit_bands, reverse=True)
        self.volume_bands = sorted(self.config.volume_bands, reverse=True)

        # Statistics
        self.tier_counts = {tier: 0 for tier in Confidence}

    def points(self, opportunity: Opportunity) -> int:
        """Total points for a candidate."""
        return (
            self._profit_points(opportunity.gross_profit_pct)
            + self._volume_points(opportunity.buy_volume_24h, opportunity.sell_volume_24h)
            + self._reputation_points(opportunity.buy_source, opportunity.sell_source)
        )

    def assess(self, opportunity: Opportunity) -> Confidence:
        """Map a candidate's points to a tier."""
        total = self.points(opportunity)
        if total >= self.config.high_threshold:
            return Confidence.HIGH
        if total >= self.config.medium_threshold:
            return Confidence.MEDIUM
        return Confidence.LOW

    def score(self, opportunities: list[Opportunity]) -> list[Opportunity]:
        """Return copies of the candidates with their confidence set."""
        scored = []
        for opportunity in opportunities:
            try:
                confidence = self.assess(opportunity)
            except Exception:
                self.logger.exception("Scoring failed", asset=opportunity.asset)
                confidence = Confidence.LOW

            self.tier_counts[confidence] += 1
            scored.append(replace(opportunity, confidence=confidence))
        return scored

    def _profit_points(self, profit_pct: float) -> int:
        for threshold, points in self.profit_bands:
            if profit_pct >= threshold:
                return points
        return 0

    def _volume_points(self, buy_volume: float, sell_volume: float) -> int:
        for threshold, points in self.volume_bands:
            if buy_volume > threshold and sell_volume > threshold:
                return points
        return 0

    def _reputation_points(self, buy_source: str, sell_source: str) -> int:
        reputable = self.config.reputable_sources
        if source_matches(buy_source, reputable) and source_matches(sell_source, reputable):
            return self.config.reputation_points
        return 0

    def get_stats(self) -> dict:
        """Get scorer statistics."""
        return {tier.value: count for tier, count in self.tier_counts.items()}
