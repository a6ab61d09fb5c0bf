"""Two-pass receipt recognition against a bill session."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

from receiptsplit.domain.bill import BillItem
from receiptsplit.domain.errors import (
    AnalysisInProgressError,
    NoPriceableLines,
    NoTextFound,
    OCRFailed,
    RecognitionError,
)
from receiptsplit.domain.ocr import OCRClient, OCRMode
from receiptsplit.receipt.locale_rules import LocaleRules
from receiptsplit.receipt.pipeline import ParseOptions, PipelineRun, run_pipeline
from receiptsplit.runtime.logging import get_logger

from .bill_session import BillSession

logger = get_logger(__name__)

EMPTY_RESULT_MESSAGE = "No items with prices found. Try a closer, flatter shot with good light."

AnalysisStatus = Literal["success", "empty", "failed", "cancelled"]


class RecognitionState(str, Enum):
    IDLE = "idle"
    ANALYZING = "analyzing"
    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one ``analyze`` call."""

    status: AnalysisStatus
    items: list[BillItem] = field(default_factory=list)
    error: RecognitionError | None = None
    message: str | None = None
    # Mode of the pass whose items were committed
    mode: OCRMode | None = None


class RecognitionOrchestrator:
    """Run the recognition pipeline with an accurate-then-fast retry policy.

    The accurate pass always runs first. Only when it yields no items does the
    fast pass run, against the same source. A hard OCR failure on either pass
    ends the analysis without a further attempt. Results are committed to the
    session only when non-empty and only if the caller has not cancelled.
    """

    def __init__(
        self,
        session: BillSession,
        ocr_client: OCRClient,
        rules: LocaleRules,
        options: ParseOptions | None = None,
    ) -> None:
        self.session = session
        self.ocr_client = ocr_client
        self.rules = rules
        self.options = options or ParseOptions()
        self.state = RecognitionState.IDLE

    async def _run_pass(self, source: bytes, mode: OCRMode) -> PipelineRun:
        fragments = await self.ocr_client.recognize(source, mode)
        run = run_pipeline(fragments, self.rules, self.options)
        logger.info(
            "%s pass: %d fragments, %d lines, %d items",
            mode.value,
            run.fragment_count,
            len(run.lines),
            len(run.items),
        )
        return run

    async def analyze(self, source: bytes, *, cancelled: Callable[[], bool] | None = None) -> AnalysisResult:
        """
        Recognize ``source`` and commit the resulting batch to the session.

        Args:
            source: Receipt image bytes
            cancelled: Polled right before committing; when it returns True
                nothing is written to the session

        Raises:
            AnalysisInProgressError: If the session already has an analysis in flight
        """
        if self.session.is_analyzing:
            raise AnalysisInProgressError("An analysis is already running for this bill")

        self.state = RecognitionState.ANALYZING
        self.session.begin_analysis(source)
        try:
            result = await self._analyze(source)
            if cancelled is not None and cancelled():
                logger.info("Analysis cancelled; discarding %d items", len(result.items))
                self.state = RecognitionState.IDLE
                return AnalysisResult(status="cancelled")
            self._commit(result)
            return result
        except BaseException:
            # Cancellation or an unexpected error: leave the committed batch alone.
            self.state = RecognitionState.IDLE
            raise
        finally:
            self.session.end_analysis()

    async def _analyze(self, source: bytes) -> AnalysisResult:
        fragment_counts: list[int] = []
        for mode in (OCRMode.ACCURATE, OCRMode.FAST):
            try:
                run = await self._run_pass(source, mode)
            except OCRFailed as e:
                logger.error("OCR failed during %s pass: %s", mode.value, e)
                return AnalysisResult(status="failed", error=e, message=str(e), mode=mode)
            if run.items:
                return AnalysisResult(status="success", items=run.items, mode=mode)
            fragment_counts.append(run.fragment_count)
            if mode is OCRMode.ACCURATE:
                logger.info("Accurate pass found no items; retrying with fast recognition")

        error: RecognitionError
        if any(fragment_counts):
            error = NoPriceableLines("Text was found but no line had a recognizable item and price")
        else:
            error = NoTextFound("No text was recognized in the image")
        return AnalysisResult(status="empty", error=error, message=EMPTY_RESULT_MESSAGE)

    def _commit(self, result: AnalysisResult) -> None:
        if result.status == "success":
            self.session.commit(result.items)
            self.state = RecognitionState.SUCCESS
        elif result.status == "empty":
            self.session.set_error(result.message)
            self.state = RecognitionState.EMPTY
        else:
            self.session.set_error(result.message)
            self.state = RecognitionState.FAILED
