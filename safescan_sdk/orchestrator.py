"""Client-side scan orchestration.

A scan runs strictly in sequence within one task::

    intake -> fingerprinting -> reputation-check -> heuristic
           -> static-pattern -> behavioral (remote call) -> complete

Any exception raised along the way is caught once, here, and turned into a
single ``failed`` event. There is no cancellation and no retry; a caller that
wants another attempt starts a fresh scan.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from safescan_sdk.async_client import AsyncAnalysisClient
from safescan_sdk.config import DEFAULT_MAX_FILE_SIZE
from safescan_sdk.exceptions import IntakeError, SafeScanError, UnexpectedError
from safescan_sdk.fingerprint import fingerprint_async
from safescan_sdk.models import (
    FileSubmission,
    ScanFailed,
    ScanOutcome,
    ScanRecord,
    ScanStage,
    ScanSucceeded,
)
from safescan_sdk.reducer import build_scan_record
from safescan_sdk.sampler import sample_content_async
from safescan_sdk.stages import (
    FALLBACK_ERROR_MESSAGE,
    Observer,
    Pacing,
    StageSequencer,
    sleep_pacing,
)
from safescan_sdk.utils import format_file_size

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
CompletionCallback = Callable[[ScanOutcome], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ScanOrchestrator:
    """Runs submitted files through the staged analysis flow.

    The orchestrator holds no per-scan state: every call to :meth:`scan`
    gets its own sequencer, buffer and record, so separate sessions may use
    separate scans concurrently. Within one session, start a new scan only
    after the previous one has finished.

    Args:
        client: Transport for the single remote analysis call.
        pacing: Delay strategy for the synthetic stage pacing.
        max_file_size: Largest accepted submission, in bytes.
        clock: Source of the completion timestamp.

    Example::

        async with AsyncAnalysisClient.from_settings(settings) as client:
            orchestrator = ScanOrchestrator(client)
            orchestrator.subscribe(lambda event: print(event.percent, event.message))
            outcome = await orchestrator.scan(FileSubmission.from_path("sample.exe"))
    """

    def __init__(
        self,
        client: AsyncAnalysisClient,
        *,
        pacing: Pacing = sleep_pacing,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        clock: Clock = _utcnow,
    ) -> None:
        self._client = client
        self._pacing = pacing
        self._max_file_size = max_file_size
        self._clock = clock
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register *observer* for progress events; returns an unsubscribe function."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    async def scan(
        self,
        submission: FileSubmission,
        on_complete: CompletionCallback | None = None,
    ) -> ScanOutcome:
        """Scan *submission* and return its terminal outcome.

        Scan failures never propagate; they come back as :class:`ScanFailed`
        after the ``failed`` event has been emitted.

        Args:
            submission: The file to analyse.
            on_complete: Called once with the terminal outcome.
        """
        sequencer = StageSequencer(self._observers, pacing=self._pacing)
        try:
            record = await self._run(submission, sequencer)
        except Exception as exc:
            outcome: ScanOutcome = self._fail(sequencer, exc)
        else:
            sequencer.complete()
            logger.info(
                "Scan %s of %s finished: %s (%d)",
                record.scan_id,
                record.file_name,
                record.verdict.severity.value,
                record.verdict.threat_score,
            )
            outcome = ScanSucceeded(record)

        if on_complete is not None:
            try:
                on_complete(outcome)
            except Exception:
                logger.exception("Completion callback %r raised", on_complete)
        return outcome

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run(self, submission: FileSubmission, sequencer: StageSequencer) -> ScanRecord:
        self._accept(submission)
        await sequencer.advance(ScanStage.INTAKE)

        digest = await fingerprint_async(submission.data)
        await sequencer.advance(ScanStage.FINGERPRINTING)

        content = await sample_content_async(submission.data)
        await sequencer.advance(ScanStage.REPUTATION_CHECK)
        await sequencer.advance(ScanStage.HEURISTIC)
        await sequencer.advance(ScanStage.STATIC_PATTERN)
        await sequencer.advance(ScanStage.BEHAVIORAL)

        envelope = await self._client.analyze(digest, submission.name, submission.size, content)
        return build_scan_record(envelope, submission, digest, self._clock())

    def _accept(self, submission: FileSubmission) -> None:
        if not isinstance(submission.data, (bytes, bytearray)):
            raise IntakeError(f"Cannot read submitted file: expected bytes, got {type(submission.data).__name__}")
        if submission.size < 0:
            raise IntakeError(f"Invalid file size: {submission.size}")
        if len(submission.data) > self._max_file_size:
            raise IntakeError(
                f"File size exceeds the maximum limit of {format_file_size(self._max_file_size)}"
            )

    @staticmethod
    def _fail(sequencer: StageSequencer, exc: Exception) -> ScanFailed:
        if isinstance(exc, SafeScanError):
            error = exc
            logger.warning("Scan failed at %s: %s", sequencer.current, exc)
        else:
            error = UnexpectedError(str(exc) or FALLBACK_ERROR_MESSAGE)
            error.__cause__ = exc
            logger.error("Unexpected scan failure at %s", sequencer.current, exc_info=exc)
        message = str(error) or FALLBACK_ERROR_MESSAGE
        sequencer.fail(message)
        return ScanFailed(error=error, message=message)
