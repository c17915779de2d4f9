"""
TRAINMAN - Static adapter

Serves a fixed set of quotes. Useful for replaying a known market state.
"""

from shared import Quote, normalize_asset

from .base import SourceAdapter


class StaticQuoteAdapter(SourceAdapter):
    """In-memory source returning preloaded quotes for the requested assets."""

    def __init__(self, quotes: list[Quote], name: str = "static"):
        self.name = name
        super().__init__()
        self.quotes = list(quotes)

    async def fetch(self, assets: list[str]) -> list[Quote]:
        wanted = {normalize_asset(a) for a in assets}
        return self._record([q for q in self.quotes if q.asset in wanted])
