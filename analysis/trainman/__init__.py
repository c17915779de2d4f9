"""
TRAINMAN - Source Adapters

"Down here, I'm God."

Moves prices between worlds. Each adapter fetches quotes from one
external venue and hands them to the aggregator, failing quietly.
"""

from .base import BatchedSourceAdapter, SourceAdapter
from .coingecko import CoinGeckoAdapter
from .dexscreener import DexScreenerAdapter
from .static import StaticQuoteAdapter

__all__ = [
    "SourceAdapter",
    "BatchedSourceAdapter",
    "DexScreenerAdapter",
    "CoinGeckoAdapter",
    "StaticQuoteAdapter",
]
