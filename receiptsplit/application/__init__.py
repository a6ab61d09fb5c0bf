"""Bill session and recognition workflows."""

from receiptsplit.application.bill_session import BillSession
from receiptsplit.application.recognition import (
    EMPTY_RESULT_MESSAGE,
    AnalysisResult,
    RecognitionOrchestrator,
    RecognitionState,
)

__all__ = [
    "BillSession",
    "RecognitionOrchestrator",
    "RecognitionState",
    "AnalysisResult",
    "EMPTY_RESULT_MESSAGE",
]
