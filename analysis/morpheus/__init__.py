"""
MORPHEUS - Pipeline Orchestrator

"I can only show you the door. You're the one that has to walk through it."

Runs the scan cycle on schedule and publishes what survives. Owns the
only state shared with the outside: the current opportunity snapshot.
"""

from .board import OpportunityBoard, OpportunitySnapshot
from .monitor import OpportunityMonitor
from .pipeline import ArbitragePipeline, CycleResult, default_adapters

__all__ = [
    "ArbitragePipeline",
    "CycleResult",
    "OpportunityBoard",
    "OpportunitySnapshot",
    "OpportunityMonitor",
    "default_adapters",
]
