"""
SERAPH - Anomaly Filter

Re-validates every detected candidate before it is published.

Checks run in a fixed order and stop at the first failure, whose reason
is reported:

1. numeric sanity of both prices
2. asset-class price band
3. asset-class profit-rate ceiling
4. source reliability (blacklist, duplicate venue)
5. stablecoin peg deviation

Candidates passing every check get a 0-100 score from a profit "sweet
spot" component, a venue reputation component and a per-class bonus.
The score maps to accept / caution / reject; only accepted candidates
are published.
"""

from dataclasses import replace

from shared import (
    ComponentLogger,
    Confidence,
    FilterConfig,
    FilterReport,
    Opportunity,
    Recommendation,
    ValidationResult,
    is_usable_price,
    meets_minimum,
    normalize_source,
    source_matches,
)

from .asset_classes import AssetClassProfile, AssetClassRegistry

_CONFIDENCE_FOR = {
    Recommendation.ACCEPT: Confidence.HIGH,
    Recommendation.CAUTION: Confidence.MEDIUM,
    Recommendation.REJECT: Confidence.LOW,
}


def _reject(reason: str, score: float = 0.0) -> ValidationResult:
    return ValidationResult(
        valid=False,
        reason=reason,
        score=score,
        recommendation=Recommendation.REJECT,
    )


class AnomalyFilter:
    """Validates, scores and gates arbitrage candidates."""

    def __init__(
        self,
        config: FilterConfig | None = None,
        registry: AssetClassRegistry | None = None,
    ):
        self.logger = ComponentLogger("SERAPH-FILTER")
        self.config = config or FilterConfig()
        self.registry = registry or AssetClassRegistry()

        # Statistics
        self.total_validated = 0
        self.total_accepted = 0
        self.total_rejected = 0

        self.logger.info(
            "Anomaly filter initialized",
            accept_score=self.config.accept_score,
            blacklisted_sources=len(self.config.blacklisted_sources),
        )

    # ========================================================================
    # VALIDATION
    # ========================================================================

    def validate(self, opportunity: Opportunity) -> ValidationResult:
        """Validate one candidate. Pure: same input, same result."""
        buy_price = opportunity.buy_price
        sell_price = opportunity.sell_price

        if not (is_usable_price(buy_price) and is_usable_price(sell_price)):
            return _reject("Invalid price data: prices must be finite and positive")

        profile = self.registry.lookup(opportunity.asset)

        reason = self._check_price_band(profile, buy_price, sell_price)
        if reason:
            return _reject(reason)

        profit_pct = (sell_price - buy_price) / buy_price * 100
        if profit_pct > profile.max_profit_pct:
            return _reject(
                f"Profit rate {profit_pct:.2f}% exceeds {profile.category.value} "
                f"ceiling {profile.max_profit_pct:.2f}%"
            )

        reason = self._check_sources(opportunity.buy_source, opportunity.sell_source)
        if reason:
            return _reject(reason)

        if profile.is_stablecoin:
            reason = self._check_peg(buy_price, sell_price)
            if reason:
                return _reject(reason)

        score = self.score(opportunity, profile, profit_pct)
        recommendation = self.recommend(score)

        if recommendation == Recommendation.ACCEPT:
            reason = "All checks passed"
        elif recommendation == Recommendation.CAUTION:
            reason = f"Quality score {score:.1f} below acceptance threshold; manual review"
        else:
            reason = f"Quality score {score:.1f} too low"

        return ValidationResult(
            valid=recommendation == Recommendation.ACCEPT,
            reason=reason,
            score=score,
            recommendation=recommendation,
        )

    def _check_price_band(
        self,
        profile: AssetClassProfile,
        buy_price: float,
        sell_price: float,
    ) -> str | None:
        for side, price in (("buy", buy_price), ("sell", sell_price)):
            if profile.in_range(price):
                continue
            if price < profile.price_min:
                return (
                    f"{side} price {price:g} below {profile.symbol} "
                    f"minimum {profile.price_min:g}"
                )
            return (
                f"{side} price {price:g} above {profile.symbol} "
                f"maximum {profile.price_max:g}"
            )
        return None

    def _check_sources(self, buy_source: str, sell_source: str) -> str | None:
        blacklist = self.config.blacklisted_sources
        for side, source in (("buy", buy_source), ("sell", sell_source)):
            if source_matches(source, blacklist):
                return f"Unreliable {side} source: {source}"

        if normalize_source(buy_source) == normalize_source(sell_source):
            return f"Buy and sell source are the same venue: {buy_source}"
        return None

    def _check_peg(self, buy_price: float, sell_price: float) -> str | None:
        peg = self.config.stablecoin_peg
        bound = self.config.stablecoin_max_deviation_pct
        for side, price in (("buy", buy_price), ("sell", sell_price)):
            deviation = abs(price - peg) / peg * 100
            if deviation > bound:
                return (
                    f"Stablecoin {side} price {price:g} deviates {deviation:.2f}% "
                    f"from peg {peg:g} (max {bound:.2f}%)"
                )
        return None

    # ========================================================================
    # SCORING
    # ========================================================================

    def score(
        self,
        opportunity: Opportunity,
        profile: AssetClassProfile | None = None,
        profit_pct: float | None = None,
    ) -> float:
        """Quality score in [0, 100]."""
        if profile is None:
            profile = self.registry.lookup(opportunity.asset)
        if profit_pct is None:
            profit_pct = opportunity.gross_profit_pct

        total = (
            self.profit_score(profit_pct, profile)
            + self.source_reputation(opportunity.buy_source)
            + self.source_reputation(opportunity.sell_source)
            + profile.score_bonus
        )
        return max(0.0, min(100.0, total))

    def profit_score(self, profit_pct: float, profile: AssetClassProfile) -> float:
        """Full marks inside the class sweet spot, tapering on both sides."""
        policy = profile.policy
        full = self.config.profit_score_max

        if not meets_minimum(profit_pct, policy.sweet_spot_min_pct):
            if policy.sweet_spot_min_pct <= 0:
                return 0.0
            # Too thin: at most half marks
            return full * 0.5 * max(0.0, profit_pct) / policy.sweet_spot_min_pct

        if profit_pct <= policy.sweet_spot_max_pct:
            return full

        # Too good to be true: linear decay to zero at the ceiling
        span = policy.max_profit_pct - policy.sweet_spot_max_pct
        if span <= 0:
            return 0.0
        return full * max(0.0, (policy.max_profit_pct - profit_pct) / span)

    def source_reputation(self, source: str) -> float:
        """Reputation points of one venue; blacklisted venues score zero."""
        if source_matches(source, self.config.blacklisted_sources):
            return 0.0

        normalized = normalize_source(source)
        best_key = None
        for key in self.config.source_reputation:
            candidate = normalize_source(key)
            if candidate and normalized.startswith(candidate):
                if best_key is None or len(candidate) > len(normalize_source(best_key)):
                    best_key = key

        if best_key is None:
            return self.config.default_source_reputation
        return self.config.source_reputation[best_key]

    def recommend(self, score: float) -> Recommendation:
        if score >= self.config.accept_score:
            return Recommendation.ACCEPT
        if score >= self.config.caution_score:
            return Recommendation.CAUTION
        return Recommendation.REJECT

    # ========================================================================
    # BATCH
    # ========================================================================

    def apply(self, opportunity: Opportunity) -> tuple[Opportunity, ValidationResult]:
        """Validate and attach the result, overriding the confidence tier."""
        result = self.validate(opportunity)
        updated = replace(
            opportunity,
            confidence=_CONFIDENCE_FOR[result.recommendation],
            validation=result,
        )
        return updated, result

    def filter(self, opportunities: list[Opportunity]) -> FilterReport:
        """Validate a batch and report what survived."""
        results = []
        accepted = []
        cautioned = 0

        for opportunity in opportunities:
            updated, result = self.apply(opportunity)
            results.append((updated, result))

            if result.recommendation == Recommendation.ACCEPT:
                accepted.append(updated)
            else:
                if result.recommendation == Recommendation.CAUTION:
                    cautioned += 1
                self.logger.debug(
                    "Candidate not accepted",
                    asset=opportunity.asset,
                    recommendation=result.recommendation.value,
                    reason=result.reason,
                    score=round(result.score, 1),
                )

        total = len(opportunities)
        rejected = total - len(accepted)
        efficiency = rejected / total * 100 if total else 0.0

        self.total_validated += total
        self.total_accepted += len(accepted)
        self.total_rejected += rejected

        self.logger.info(
            "Filter batch completed",
            total=total,
            accepted=len(accepted),
            cautioned=cautioned,
            rejected=rejected,
            efficiency_pct=round(efficiency, 1),
        )

        return FilterReport(
            total=total,
            accepted=len(accepted),
            cautioned=cautioned,
            rejected=rejected,
            efficiency_pct=efficiency,
            results=tuple(results),
            accepted_opportunities=tuple(accepted),
        )

    def get_stats(self) -> dict:
        """Get filter statistics."""
        return {
            "total_validated": self.total_validated,
            "total_accepted": self.total_accepted,
            "total_rejected": self.total_rejected,
            "efficiency_pct": (
                self.total_rejected / self.total_validated * 100
                if self.total_validated else 0.0
            ),
        }
