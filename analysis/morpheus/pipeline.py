"""
MORPHEUS - Arbitrage Pipeline

One full pass: aggregate -> detect -> score -> filter -> rank.
"""

import time
from dataclasses import dataclass

from oracle import ConfidenceScorer, OpportunityDetector, QuoteAggregator, rank_opportunities
from rama_kandra import LiquidityScreen
from sati import ExecutionCostModel
from seraph import AnomalyFilter, AssetClassRegistry
from shared import ArbscanConfig, ComponentLogger, FilterReport, Opportunity
from trainman import CoinGeckoAdapter, DexScreenerAdapter, SourceAdapter


@dataclass(frozen=True)
class CycleResult:
    """Outcome of one pipeline pass."""
    opportunities: tuple[Opportunity, ...]
    quotes_collected: int
    candidates: int
    filter_report: FilterReport | None
    started_at_ms: int
    completed_at_ms: int

    @property
    def duration_ms(self) -> int:
        return self.completed_at_ms - self.started_at_ms


class ArbitragePipeline:
    """Wires the pipeline stages together for one cycle at a time."""

    def __init__(
        self,
        aggregator: QuoteAggregator,
        detector: OpportunityDetector,
        scorer: ConfidenceScorer,
        anomaly_filter: AnomalyFilter | None = None,
        assets: list[str] | None = None,
        filter_enabled: bool = True,
    ):
        self.logger = ComponentLogger("MORPHEUS-PIPELINE")
        self.aggregator = aggregator
        self.detector = detector
        self.scorer = scorer
        self.anomaly_filter = anomaly_filter
        self.assets = list(assets or [])
        self.filter_enabled = filter_enabled and anomaly_filter is not None

    @classmethod
    def from_config(
        cls,
        config: ArbscanConfig,
        adapters: list[SourceAdapter] | None = None,
    ) -> "ArbitragePipeline":
        """Build the pipeline and its collaborators from configuration."""
        if adapters is None:
            adapters = default_adapters(config)

        registry = AssetClassRegistry(config.asset_classes)
        aggregator = QuoteAggregator(
            adapters,
            adapter_timeout_ms=config.aggregator.adapter_timeout_ms,
            staleness_threshold_ms=config.aggregator.staleness_threshold_ms,
        )
        detector = OpportunityDetector(
            registry=registry,
            cost_model=ExecutionCostModel.from_config(config.cost),
            trade_amount_usd=config.trade_amount_usd,
        )
        return cls(
            aggregator=aggregator,
            detector=detector,
            scorer=ConfidenceScorer(config.scoring),
            anomaly_filter=AnomalyFilter(config.filter, registry),
            assets=config.assets,
            filter_enabled=config.filter_enabled,
        )

    async def run_cycle(self, assets: list[str] | None = None) -> CycleResult:
        """Run one full pass and return its result. Publishes nothing."""
        started_at_ms = int(time.time() * 1000)
        wanted = list(assets) if assets is not None else self.assets

        quotes = await self.aggregator.collect(wanted)
        candidates = self.detector.detect(quotes)
        scored = self.scorer.score(candidates)

        report = None
        if self.filter_enabled:
            report = self.anomaly_filter.filter(scored)
            accepted = list(report.accepted_opportunities)
        else:
            accepted = scored

        ranked = rank_opportunities(accepted)
        completed_at_ms = int(time.time() * 1000)

        self.logger.info(
            "Cycle completed",
            assets=len(wanted),
            quotes=len(quotes),
            candidates=len(candidates),
            published=len(ranked),
            duration_ms=completed_at_ms - started_at_ms,
        )

        return CycleResult(
            opportunities=tuple(ranked),
            quotes_collected=len(quotes),
            candidates=len(candidates),
            filter_report=report,
            started_at_ms=started_at_ms,
            completed_at_ms=completed_at_ms,
        )


def default_adapters(config: ArbscanConfig) -> list[SourceAdapter]:
    """Live adapters described by configuration."""
    screen = LiquidityScreen(
        min_liquidity_usd=config.aggregator.min_liquidity_usd,
        max_pairs_per_asset=config.aggregator.max_pairs_per_asset,
    )
    adapters: list[SourceAdapter] = [
        DexScreenerAdapter(
            screen=screen,
            base_url=config.dexscreener_url,
            batch_size=config.aggregator.batch_size,
            batch_delay_ms=config.aggregator.batch_delay_ms,
            request_timeout_ms=config.aggregator.request_timeout_ms,
        ),
    ]
    if config.coingecko_enabled:
        adapters.append(CoinGeckoAdapter(
            base_url=config.coingecko_url,
            request_timeout_ms=config.aggregator.request_timeout_ms,
        ))
    return adapters
