"""Core domain models for receiptsplit.

This module provides the data models shared by the recognition pipeline and
its consumers:
- TextFragment: positioned OCR text, the pipeline input
- ParsedLine, AggregationKey, AggregationEntry: intermediate parse records
- BillItem: the final, editable item on a bill

Usage:
    from receiptsplit.domain import BillItem, TextFragment
"""

from receiptsplit.domain.bill import AggregationEntry, AggregationKey, BillItem, ParsedLine, TextFragment
from receiptsplit.domain.errors import (
    AnalysisInProgressError,
    NoPriceableLines,
    NoTextFound,
    OCRFailed,
    RecognitionError,
    UnknownLocaleError,
)
from receiptsplit.domain.split import person_total, unassigned_items

__all__ = [
    "AggregationEntry",
    "AggregationKey",
    "BillItem",
    "ParsedLine",
    "TextFragment",
    "AnalysisInProgressError",
    "NoPriceableLines",
    "NoTextFound",
    "OCRFailed",
    "RecognitionError",
    "UnknownLocaleError",
    "person_total",
    "unassigned_items",
]
