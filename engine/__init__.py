"""
engine/
-------
Execution & recording layer.

    from engine import ExecutionController, Recorder, RealTimePacing
"""

from engine.pacing     import PacingPolicy, NoPacing, RealTimePacing, VirtualClockPacing
from engine.controller import (
    ExecutionController,
    ExecutionState,
    ExecutionSummary,
    ExecutionAlreadyRunningError,
    CancellationToken,
)
from engine.recorder   import Recorder, RecordingSink, RecordedEvent, RunMetrics

__all__ = [
    "PacingPolicy",
    "NoPacing",
    "RealTimePacing",
    "VirtualClockPacing",
    "ExecutionController",
    "ExecutionState",
    "ExecutionSummary",
    "ExecutionAlreadyRunningError",
    "CancellationToken",
    "Recorder",
    "RecordingSink",
    "RecordedEvent",
    "RunMetrics",
]
