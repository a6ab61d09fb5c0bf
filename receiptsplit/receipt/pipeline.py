"""Receipt recognition pipeline: fragments -> lines -> parsed lines -> bill items.

Every stage here is synchronous and pure. The OCR call and the retry policy
live in ``receiptsplit.application.recognition``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from receiptsplit.domain.bill import BillItem, ParsedLine, TextFragment

from .aggregation import aggregate_lines
from .line_parser import parse_lines
from .line_reconstruction import Y_TOLERANCE, reconstruct_lines
from .locale_rules import LocaleRules

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class ParseOptions:
    """Parsing policy.

    ``require_price``: drop lines that yield a name but no price. When False
    they become unpriced items.
    """

    require_price: bool = True
    y_tolerance: float = Y_TOLERANCE

@dataclass
class PipelineRun:
    """Everything one pipeline run produced, kept for diagnostics."""

    fragment_count: int
    lines: list[str] = field(default_factory=list)
    parsed: list[ParsedLine] = field(default_factory=list)
    items: list[BillItem] = field(default_factory=list)

def run_pipeline(
    fragments: Iterable[TextFragment],
    rules: LocaleRules,
    options: ParseOptions | None = None,
) -> PipelineRun:
    """Run reconstruction, classification, extraction and aggregation."""
    options = options or ParseOptions()
    fragment_list = list(fragments)
    lines = reconstruct_lines(fragment_list, tolerance=options.y_tolerance)
    parsed = parse_lines(lines, rules, require_price=options.require_price)
    items = aggregate_lines(parsed)
    logger.debug(
        "Pipeline: %d fragments -> %d lines -> %d parsed -> %d items",
        len(fragment_list),
        len(lines),
        len(parsed),
        len(items),
    )
    return PipelineRun(fragment_count=len(fragment_list), lines=lines, parsed=parsed, items=items)

def parse_fragments(
    fragments: Iterable[TextFragment],
    rules: LocaleRules,
    options: ParseOptions | None = None,
) -> list[BillItem]:
    """Return the bill items recognized in one image's fragments."""
    return run_pipeline(fragments, rules, options).items
