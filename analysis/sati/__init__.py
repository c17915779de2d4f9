"""
SATI - Execution Cost Estimator

"I made a choice, and that choice was to love."

Prices the act of trading. Turns assumed gas conditions into a flat
execution cost so thin spreads are recognized as unprofitable.
"""

from .cost_model import CostEstimate, ExecutionCostModel

__all__ = ["CostEstimate", "ExecutionCostModel"]
