"""
MORPHEUS - Opportunity Board

The published opportunity list. The pipeline is its only writer; readers
always see one complete cycle.
"""

from dataclasses import dataclass, field

from oracle import summarize
from shared import Opportunity

from .pipeline import CycleResult


@dataclass(frozen=True)
class OpportunitySnapshot:
    """Immutable view of one published cycle."""
    opportunities: tuple[Opportunity, ...] = ()
    updated_at_ms: int | None = None
    cycle: int = 0
    summary: dict = field(default_factory=lambda: summarize([]))

    def to_dict(self) -> dict:
        return {
            "opportunities": [o.to_dict() for o in self.opportunities],
            "updated_at_ms": self.updated_at_ms,
            "cycle": self.cycle,
            "summary": dict(self.summary),
        }


class OpportunityBoard:
    """Holds the current snapshot; publishing swaps it whole."""

    def __init__(self):
        self._snapshot = OpportunitySnapshot()

    def publish(self, result: CycleResult) -> OpportunitySnapshot:
        snapshot = OpportunitySnapshot(
            opportunities=tuple(result.opportunities),
            updated_at_ms=result.completed_at_ms,
            cycle=self._snapshot.cycle + 1,
            summary=summarize(list(result.opportunities)),
        )
        self._snapshot = snapshot
        return snapshot

    def current(self) -> OpportunitySnapshot:
        return self._snapshot
