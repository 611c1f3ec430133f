"""
pacing.py - Pacing Policies
============================
Executors only *ask* for a pause (a Pause item with a delay in ms).
How long the controller actually waits is decided here, so the
algorithms stay deterministic and tests never sleep.

    RealTimePacing      - really waits, delay scaled by a speed preset
    VirtualClockPacing  - advances a fake clock, records every pause
    NoPacing            - returns immediately

A pacing policy may be handed a threading.Event; the real-time policy
waits on it instead of sleeping, so a cancel wakes it up early.
"""

import asyncio
import threading
import time
from typing import List, Optional, Tuple, Union

import config


class PacingPolicy:
    """Base policy: no waiting at all."""

    def scaled(self, delay_ms: float) -> float:
        return delay_ms

    def pause(self, delay_ms: float, phase: str, wake: Optional[threading.Event] = None) -> None:
        pass

    async def apause(self, delay_ms: float, phase: str) -> None:
        pass


NoPacing = PacingPolicy


class RealTimePacing(PacingPolicy):
    """
    Attributes:
        factor : Multiplier on every requested delay (0 disables waiting).
    """

    def __init__(self, speed: Union[str, float] = config.PACING_SPEED):
        if isinstance(speed, str):
            if speed not in config.SPEED_PRESETS:
                raise ValueError(f"Unknown speed preset '{speed}'; choose from {sorted(config.SPEED_PRESETS)}")
            speed = config.SPEED_PRESETS[speed]
        if speed < 0:
            raise ValueError("Speed factor must be >= 0")
        self.factor: float = float(speed)

    def scaled(self, delay_ms: float) -> float:
        return delay_ms * self.factor

    def pause(self, delay_ms: float, phase: str, wake: Optional[threading.Event] = None) -> None:
        seconds = self.scaled(delay_ms) / 1000
        if seconds <= 0:
            return
        if wake is not None:
            wake.wait(seconds)
        else:
            time.sleep(seconds)

    async def apause(self, delay_ms: float, phase: str) -> None:
        seconds = self.scaled(delay_ms) / 1000
        if seconds > 0:
            await asyncio.sleep(seconds)


class VirtualClockPacing(PacingPolicy):
    """Advances `now_ms` instead of waiting.  `pauses` keeps (phase, delay) pairs."""

    def __init__(self, factor: float = 1.0):
        self.factor: float                     = factor
        self.now_ms: float                     = 0.0
        self.pauses: List[Tuple[str, float]]   = []

    def scaled(self, delay_ms: float) -> float:
        return delay_ms * self.factor

    def pause(self, delay_ms: float, phase: str, wake: Optional[threading.Event] = None) -> None:
        waited = self.scaled(delay_ms)
        self.now_ms += waited
        self.pauses.append((phase, waited))

    async def apause(self, delay_ms: float, phase: str) -> None:
        self.pause(delay_ms, phase)
