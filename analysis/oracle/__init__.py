"""
ORACLE - Opportunity Engine

"You do not truly know someone until you fight them."

Sees the gaps between markets. Aggregates quotes from multiple
sources, detects cross-venue price gaps, scores and ranks them.
"""

from .aggregator import QuoteAggregator
from .detector import OpportunityDetector
from .ranker import rank_opportunities, summarize
from .scorer import ConfidenceScorer

__all__ = [
    "QuoteAggregator",
    "OpportunityDetector",
    "ConfidenceScorer",
    "rank_opportunities",
    "summarize",
]
