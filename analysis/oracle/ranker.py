"""
ORACLE - Opportunity Ranker
"""

import numpy as np

from shared import Opportunity


def rank_opportunities(opportunities: list[Opportunity]) -> list[Opportunity]:
    """Stable sort by net profit, highest first."""
    # sorted() keeps input order among equal keys even with reverse=True
    return sorted(opportunities, key=lambda o: o.net_profit, reverse=True)


def summarize(opportunities: list[Opportunity]) -> dict:
    """Aggregate profit statistics for a published list."""
    if not opportunities:
        return {
            "count": 0,
            "total_net_profit": 0.0,
            "mean_net_profit": 0.0,
            "median_gross_profit_pct": 0.0,
            "best_net_profit": 0.0,
        }

    net = np.array([o.net_profit for o in opportunities], dtype=float)
    gross = np.array([o.gross_profit_pct for o in opportunities], dtype=float)

    return {
        "count": len(opportunities),
        "total_net_profit": round(float(net.sum()), 2),
        "mean_net_profit": round(float(net.mean()), 2),
        "median_gross_profit_pct": round(float(np.median(gross)), 4),
        "best_net_profit": round(float(net.max()), 2),
    }
