"""
RAMA-KANDRA - Liquidity Screen

Rejects illiquid trading pairs before they become quotes.
"""

from dataclasses import dataclass

from shared import ComponentLogger, Quote, normalize_asset


@dataclass
class PairListing:
    """Trading pair as reported by a venue aggregator."""
    venue: str
    base_symbol: str
    quote_symbol: str
    price_usd: float
    liquidity_usd: float
    volume_24h_usd: float
    chain: str | None = None

    def to_quote(self, observed_at_ms: int) -> Quote:
        """Convert to a pipeline quote."""
        return Quote(
            source=self.venue,
            asset_pair=f"{self.base_symbol.upper()}/{self.quote_symbol.upper()}",
            price=self.price_usd,
            volume_24h=self.volume_24h_usd,
            observed_at_ms=observed_at_ms,
        )


class LiquidityScreen:
    """
    Screens venue listings by liquidity.

    Keeps only pairs of the requested asset whose liquidity is above the
    minimum (fake or dust pools quote nonsense prices) and caps how many
    pairs survive per asset, most liquid first.
    """

    def __init__(
        self,
        min_liquidity_usd: float = 10000,
        max_pairs_per_asset: int = 3,
    ):
        if max_pairs_per_asset < 1:
            raise ValueError("max_pairs_per_asset must be at least 1")

        self.logger = ComponentLogger("RAMA-KANDRA-LIQUIDITY")
        self.min_liquidity_usd = min_liquidity_usd
        self.max_pairs_per_asset = max_pairs_per_asset

        # Statistics
        self.screened = 0
        self.rejected_illiquid = 0
        self.trimmed = 0

        self.logger.info(
            "Liquidity screen initialized",
            min_liquidity_usd=min_liquidity_usd,
            max_pairs_per_asset=max_pairs_per_asset,
        )

    def screen(self, asset: str, listings: list[PairListing]) -> list[PairListing]:
        """Select the most liquid listings of `asset`."""
        target = normalize_asset(asset)
        matching = [
            listing for listing in listings
            if normalize_asset(listing.base_symbol) == target
        ]
        self.screened += len(matching)

        liquid = [
            listing for listing in matching
            if listing.liquidity_usd > self.min_liquidity_usd
        ]
        self.rejected_illiquid += len(matching) - len(liquid)

        liquid.sort(key=lambda listing: listing.liquidity_usd, reverse=True)
        kept = liquid[:self.max_pairs_per_asset]
        self.trimmed += len(liquid) - len(kept)

        if len(kept) < len(matching):
            self.logger.debug(
                "Listings screened",
                asset=target,
                matching=len(matching),
                kept=len(kept),
            )

        return kept

    def get_stats(self) -> dict:
        """Get screen statistics."""
        return {
            "screened": self.screened,
            "rejected_illiquid": self.rejected_illiquid,
            "trimmed": self.trimmed,
        }
