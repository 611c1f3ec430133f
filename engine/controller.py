"""
controller.py - Execution Controller
=====================================
The controller is the ONLY object a host drives during a run.  It owns
one executor generator, forwards every render event to the sink in
emission order, hands every Pause to the pacing policy, and flips
`done` when the run is over.

State machine:
    IDLE     ->  start_execution()  ->  RUNNING
    RUNNING  ->  (executor exhausted, cancelled or failed)  ->  DONE
    DONE     ->  start_execution()  ->  RUNNING   (fresh run)

Only one run may be active per controller; starting a second one while
RUNNING raises ExecutionAlreadyRunningError.  A CancellationToken is
checked at every pause point.  Errors raised by the executor (e.g. a
missing edge) propagate to the caller after the controller reaches DONE.

Thread safety:
  Runs are single-threaded.  The only cross-thread operation supported
  is CancellationToken.cancel().
"""

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generator, Optional

from graph import Graph
from algorithms import AlgoInfo, get_algorithm
from algorithms.events import ExecutorItem, Pause, RenderEvent
from algorithms.traversal import TraversalResult
from engine.pacing import PacingPolicy, RealTimePacing

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class ExecutionState(Enum):
    IDLE    = "idle"
    RUNNING = "running"
    DONE    = "done"


class ExecutionAlreadyRunningError(RuntimeError):
    """start_execution() was called while a run is still in flight."""


# ---------------------------------------------------------------------------
# Cancellation
# ---------------------------------------------------------------------------
class CancellationToken:
    """Set once, never cleared.  Safe to cancel from another thread."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def event(self) -> threading.Event:
        return self._event


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------
@dataclass
class ExecutionSummary:
    """
    Attributes:
        events_emitted : Render events forwarded to the sink.
        pauses         : Pause points reached.
        paced_ms       : Total delay handed to the pacing policy (after scaling).
        wall_time_ms   : Wall-clock duration of the run.
        cancelled      : True if the token stopped the run early.
        result         : Executor return value (None when cancelled or failed).
    """

    algo_key:       str                       = ""
    source:         str                       = ""
    destination:    Optional[str]             = None
    events_emitted: int                       = 0
    pauses:         int                       = 0
    paced_ms:       float                     = 0.0
    wall_time_ms:   float                     = 0.0
    cancelled:      bool                      = False
    result:         Optional[TraversalResult] = None


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class ExecutionController:
    """
    Attributes:
        graph       : Graph the executor reads (must stay untouched while RUNNING).
        info        : AlgoInfo of the wrapped executor.
        on_event    : Callback(RenderEvent) fired for every emitted event.
                      The rendering sink hooks in here.
        pacing      : PacingPolicy deciding how long each Pause lasts.
        token       : CancellationToken checked at every pause point.
        state       : Current ExecutionState.
        summary     : ExecutionSummary of the latest run.
    """

    def __init__(
        self,
        graph: Graph,
        algo_key: str,
        source: str,
        destination: Optional[str] = None,
        on_event: Optional[Callable[[RenderEvent], None]] = None,
        pacing: Optional[PacingPolicy] = None,
        token: Optional[CancellationToken] = None,
    ):
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")
        if info.needs_destination and destination is None:
            raise ValueError(f"{info.label} needs a destination vertex")

        self.graph:       Graph                = graph
        self.info:        AlgoInfo             = info
        self.source:      str                  = source
        self.destination: Optional[str]        = destination
        self.on_event:    Optional[Callable[[RenderEvent], None]] = on_event
        self.pacing:      PacingPolicy         = pacing if pacing is not None else RealTimePacing()
        self.token:       CancellationToken    = token or CancellationToken()
        self.state:       ExecutionState       = ExecutionState.IDLE
        self.summary:     ExecutionSummary     = ExecutionSummary()

        self._started_at: float = 0.0

    @property
    def done(self) -> bool:
        return self.state == ExecutionState.DONE

    # ------------------------------------------------------------------
    # Running
    # ------------------------------------------------------------------
    def start_execution(self) -> ExecutionSummary:
        """Run to completion (or cancellation), blocking through every pause."""
        for _ in self.iter_events():
            pass
        return self.summary

    def iter_events(self) -> Generator[RenderEvent, None, ExecutionSummary]:
        """
        Drive the run lazily.  Each event is yielded after it reached
        `on_event`; pauses happen between yields.  Closing the generator
        early abandons the run and still leaves the controller DONE.
        """
        self._begin()
        items = self._items()
        try:
            for item in items:
                if isinstance(item, Pause):
                    if not self._pause(item):
                        break
                    continue
                self._emit(item)
                yield item
        except Exception:
            logger.exception(f"{self.info.label} run from '{self.source}' failed")
            raise
        finally:
            items.close()
            self._finish()
        return self.summary

    async def start_execution_async(self) -> ExecutionSummary:
        """Same run, but pauses are awaited instead of blocking the thread."""
        self._begin()
        items = self._items()
        try:
            for item in items:
                if isinstance(item, Pause):
                    if self._check_cancelled():
                        break
                    self._count_pause(item)
                    await self.pacing.apause(item.delay_ms, item.phase)
                    if self._check_cancelled():
                        break
                    continue
                self._emit(item)
        except Exception:
            logger.exception(f"{self.info.label} run from '{self.source}' failed")
            raise
        finally:
            items.close()
            self._finish()
        return self.summary

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _items(self) -> Generator[ExecutorItem, None, None]:
        """Executor items, with the executor's return value captured."""
        if self._check_cancelled():
            return
        gen = self.info.fn(graph=self.graph, source=self.source, destination=self.destination)
        self.summary.result = yield from gen

    def _begin(self) -> None:
        if self.state == ExecutionState.RUNNING:
            raise ExecutionAlreadyRunningError(
                f"{self.info.label} from '{self.source}' is already running"
            )
        self.state = ExecutionState.RUNNING
        self.summary = ExecutionSummary(
            algo_key=self.info.key,
            source=self.source,
            destination=self.destination,
        )
        self._started_at = time.monotonic()
        logger.info(
            f"Starting {self.info.label} from '{self.source}'"
            + (f" to '{self.destination}'" if self.destination else "")
        )

    def _finish(self) -> None:
        self.summary.wall_time_ms = round((time.monotonic() - self._started_at) * 1000, 2)
        self.state = ExecutionState.DONE
        logger.info(
            f"{self.info.label} done: {self.summary.events_emitted} events, "
            f"{self.summary.pauses} pauses, cancelled={self.summary.cancelled}"
        )

    def _emit(self, event: RenderEvent) -> None:
        self.summary.events_emitted += 1
        if self.on_event is not None:
            self.on_event(event)

    def _pause(self, item: Pause) -> bool:
        """Wait out one pause.  False means the run was cancelled."""
        if self._check_cancelled():
            return False
        self._count_pause(item)
        self.pacing.pause(item.delay_ms, item.phase, self.token.event)
        return not self._check_cancelled()

    def _count_pause(self, item: Pause) -> None:
        self.summary.pauses += 1
        self.summary.paced_ms += self.pacing.scaled(item.delay_ms)

    def _check_cancelled(self) -> bool:
        if self.token.cancelled and not self.summary.cancelled:
            logger.warning(f"{self.info.label} from '{self.source}' cancelled")
            self.summary.cancelled = True
        return self.token.cancelled
