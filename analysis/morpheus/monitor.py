"""
MORPHEUS - Opportunity Monitor

Drives the pipeline on a fixed interval and publishes each completed
cycle to the board.
"""

import asyncio

from shared import ComponentLogger, log_context

from .board import OpportunityBoard, OpportunitySnapshot
from .pipeline import ArbitragePipeline, CycleResult


class OpportunityMonitor:
    """
    Periodic scheduler around an `ArbitragePipeline`.

    `stop()` returns immediately; a cycle still in flight may finish but
    its result is dropped instead of published. Cycles never overlap:
    the loop and `collect_now()` share a lock.
    """

    def __init__(
        self,
        pipeline: ArbitragePipeline,
        board: OpportunityBoard | None = None,
        interval_s: float = 60.0,
    ):
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")

        self.logger = ComponentLogger("MORPHEUS-MONITOR")
        self.pipeline = pipeline
        self.board = board or OpportunityBoard()
        self.interval_s = interval_s

        self._task: asyncio.Task | None = None
        self._stop_event: asyncio.Event | None = None
        self._cycle_lock = asyncio.Lock()

        # Statistics
        self.cycles_completed = 0
        self.cycles_failed = 0
        self.cycles_discarded = 0
        self.last_cycle_at_ms: int | None = None
        self.last_error: str | None = None

    @property
    def is_running(self) -> bool:
        return (
            self._task is not None
            and not self._task.done()
            and self._stop_event is not None
            and not self._stop_event.is_set()
        )

    def start(self) -> bool:
        """Start periodic monitoring. Returns False if already running."""
        if self.is_running:
            return False

        self._stop_event = asyncio.Event()
        self._task = asyncio.get_running_loop().create_task(
            self._run_loop(self._stop_event)
        )
        self.logger.info("Monitoring started", interval_s=self.interval_s)
        return True

    def stop(self) -> bool:
        """Request stop without waiting for an in-flight cycle."""
        if self._stop_event is None or self._stop_event.is_set():
            return False

        self._stop_event.set()
        self.logger.info("Monitoring stop requested")
        return True

    async def wait_closed(self) -> None:
        """Wait for the monitoring loop to exit after `stop()`."""
        if self._task is not None:
            await self._task

    async def collect_now(self) -> CycleResult:
        """Run exactly one cycle, publish it and return the result."""
        async with self._cycle_lock:
            with log_context(cycle=self._next_cycle()):
                result = await self.pipeline.run_cycle()
                self._publish(result)
        return result

    def get_opportunities(self) -> OpportunitySnapshot:
        """Current published snapshot."""
        return self.board.current()

    def get_status(self) -> dict:
        """Health report for the serving layer."""
        snapshot = self.board.current()
        return {
            "running": self.is_running,
            "interval_s": self.interval_s,
            "cycles_completed": self.cycles_completed,
            "cycles_failed": self.cycles_failed,
            "cycles_discarded": self.cycles_discarded,
            "last_cycle_at_ms": self.last_cycle_at_ms,
            "last_error": self.last_error,
            "opportunity_count": len(snapshot.opportunities),
            "filter_enabled": self.pipeline.filter_enabled,
        }

    async def _run_loop(self, stop_event: asyncio.Event) -> None:
        while not stop_event.is_set():
            try:
                async with self._cycle_lock:
                    # Stop may arrive while collect_now() holds the lock
                    if stop_event.is_set():
                        break
                    with log_context(cycle=self._next_cycle()):
                        result = await self.pipeline.run_cycle()
                        if stop_event.is_set():
                            self.cycles_discarded += 1
                            self.logger.info("Cycle result discarded after stop")
                            break
                        self._publish(result)
            except Exception as e:
                self.cycles_failed += 1
                self.last_error = str(e) or type(e).__name__
                self.logger.exception("Cycle failed")

            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.interval_s)
            except asyncio.TimeoutError:
                pass

        self.logger.info("Monitoring stopped", cycles_completed=self.cycles_completed)

    def _next_cycle(self) -> int:
        return self.board.current().cycle + 1

    def _publish(self, result: CycleResult) -> None:
        snapshot = self.board.publish(result)
        self.cycles_completed += 1
        self.last_cycle_at_ms = result.completed_at_ms
        self.last_error = None

        self.logger.info(
            "Opportunities published",
            cycle=snapshot.cycle,
            count=len(snapshot.opportunities),
            best_net_profit=snapshot.summary["best_net_profit"],
        )
