"""Error taxonomy for receipt recognition."""

from __future__ import annotations


class RecognitionError(Exception):
    """Base class for recognition failures reported to the user."""


class OCRFailed(RecognitionError):
    """The OCR collaborator reported a hard failure.

    Terminal for an analysis: no fallback pass is attempted and the message
    is surfaced verbatim.
    """


class NoTextFound(RecognitionError):
    """OCR returned zero fragments on both passes."""


class NoPriceableLines(RecognitionError):
    """Lines were reconstructed but none survived classification and extraction."""


class AnalysisInProgressError(RuntimeError):
    """Raised when a session already has an analysis in flight."""


class UnknownLocaleError(ValueError):
    """Raised when a locale preset name does not resolve to a rule file."""
