"""
RAMA-KANDRA - Liquidity Analyzer

"I love my daughter very much. I find her to be the most beautiful
thing I have ever seen. But where we are from, that is not enough."

Understands which markets are real. Screens venue listings by
liquidity so thin or fake pools never reach the pipeline.
"""

from .liquidity import LiquidityScreen, PairListing

__all__ = ["LiquidityScreen", "PairListing"]
