"""Forward-only progress state machine for a single scan.

The percentages up to ``behavioral`` are synthesized locally: the remote
service answers in one blocking call, so each stage is followed by a pacing
delay that gives the caller continuous feedback. Pacing is injectable so tests
can run the sequence instantly.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable

from safescan_sdk.exceptions import StageTransitionError
from safescan_sdk.models import ProgressEvent, ScanStage

logger = logging.getLogger(__name__)

Observer = Callable[[ProgressEvent], None]
Pacing = Callable[[float], Awaitable[None]]

FALLBACK_ERROR_MESSAGE = "An error occurred during scanning"


@dataclass(frozen=True, slots=True)
class StageStep:
    """One row of the stage plan.

    Attributes:
        stage: Stage entered by this step.
        percent: Progress reported on entry.
        message: Status line reported on entry.
        pacing: Seconds of synthetic delay after entry.
    """

    stage: ScanStage
    percent: int
    message: str
    pacing: float = 0.0


STAGE_PLAN: tuple[StageStep, ...] = (
    StageStep(ScanStage.INTAKE, 10, "File uploaded successfully", 0.5),
    StageStep(ScanStage.FINGERPRINTING, 20, "SHA-256 hash generated", 0.5),
    StageStep(ScanStage.REPUTATION_CHECK, 30, "Checking hash against threat databases...", 1.0),
    StageStep(ScanStage.HEURISTIC, 50, "Performing heuristic analysis...", 1.0),
    StageStep(ScanStage.STATIC_PATTERN, 70, "Analyzing file content for malicious patterns...", 1.0),
    StageStep(ScanStage.BEHAVIORAL, 85, "Querying behavioral analysis databases...", 1.5),
    StageStep(ScanStage.COMPLETE, 100, "Analysis complete!"),
)

_ORDER = tuple(step.stage for step in STAGE_PLAN)
_STEPS = {step.stage: step for step in STAGE_PLAN}


async def sleep_pacing(seconds: float) -> None:
    await asyncio.sleep(seconds)


async def no_pacing(seconds: float) -> None:
    return None


class StageSequencer:
    """Drives one scan through :data:`STAGE_PLAN`.

    Each transition emits exactly one :class:`ProgressEvent` to every observer
    before control returns. Observers are called synchronously; an observer
    that raises is logged and skipped. Once ``complete`` or ``failed`` has
    been emitted, every further transition raises
    :class:`StageTransitionError`.

    Args:
        observers: Callables receiving each event in emission order.
        pacing: Coroutine function awaited with each step's delay.
    """

    def __init__(self, observers: Iterable[Observer] = (), pacing: Pacing = sleep_pacing) -> None:
        self._observers = tuple(observers)
        self._pacing = pacing
        self._current: ScanStage | None = None
        self._events: list[ProgressEvent] = []

    @property
    def current(self) -> ScanStage | None:
        return self._current

    @property
    def finished(self) -> bool:
        return self._current is not None and self._current.is_terminal

    @property
    def events(self) -> tuple[ProgressEvent, ...]:
        return tuple(self._events)

    async def advance(self, stage: ScanStage) -> ProgressEvent:
        """Enter the next stage of the plan and await its pacing delay."""
        if stage is ScanStage.COMPLETE:
            raise StageTransitionError("Use complete() to finish a scan")
        event = self._enter(stage)
        step = _STEPS[stage]
        if step.pacing:
            await self._pacing(step.pacing)
        return event

    def complete(self) -> ProgressEvent:
        return self._enter(ScanStage.COMPLETE)

    def fail(self, message: str) -> ProgressEvent:
        """Move to ``failed`` from any non-terminal stage."""
        self._check_open(ScanStage.FAILED)
        event = ProgressEvent(ScanStage.FAILED, 0, message or FALLBACK_ERROR_MESSAGE)
        self._emit(event)
        return event

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _enter(self, stage: ScanStage) -> ProgressEvent:
        self._check_open(stage)
        expected = _ORDER[0] if self._current is None else _ORDER[_ORDER.index(self._current) + 1]
        if stage is not expected:
            raise StageTransitionError(
                f"Cannot enter {stage.value!r}; next stage is {expected.value!r}"
            )
        step = _STEPS[stage]
        event = ProgressEvent(stage, step.percent, step.message)
        self._emit(event)
        return event

    def _check_open(self, stage: ScanStage) -> None:
        if self._current is not None and self._current.is_terminal:
            raise StageTransitionError(
                f"Cannot enter {stage.value!r}; scan already {self._current.value!r}"
            )

    def _emit(self, event: ProgressEvent) -> None:
        self._current = event.stage
        self._events.append(event)
        logger.debug("Stage %s (%d%%): %s", event.stage.value, event.percent, event.message)
        for observer in self._observers:
            try:
                observer(event)
            except Exception:
                logger.exception("Progress observer %r failed on %s", observer, event.stage.value)
