"""Turn one reconstructed receipt line into a ParsedLine."""

from __future__ import annotations

import logging

from receiptsplit.domain.bill import ParsedLine

from ..locale_rules import LocaleRules
from .classifier import classify_line
from .common import tokenize
from .names import build_name, prettify_name
from .price_parser import extract_price
from .quantity_parser import extract_quantity, match_explicit_quantity

logger = logging.getLogger(__name__)

def parse_line(line: str, rules: LocaleRules, *, require_price: bool = True) -> ParsedLine | None:
    """
    Parse a single line into (name, unit price, quantity).

    Returns None for lines that are noise: blocked by the classifier, without a
    price when ``require_price`` is set, or with nothing left to name the item.
    Explicit quantity forms claim their tokens first so "Burger 2 pcs" is not
    read as costing 2; the leading-integer heuristic runs after the price is
    known so it never steals the price token.
    """
    classification = classify_line(line, rules)
    if not classification.keep:
        logger.debug("Dropped line %r (rule: %s, keyword: %s)", line, classification.tag, classification.keyword)
        return None

    tokens = tokenize(line)
    explicit = match_explicit_quantity(tokens, rules)
    claimed = explicit.indices if explicit else ()

    price = extract_price(tokens, rules, skip=claimed)
    if price is None and require_price:
        logger.debug("Dropped line %r (no price)", line)
        return None

    price_indices = price.indices if price else ()
    quantity = explicit or extract_quantity(tokens, rules, skip=price_indices)

    consumed = set(price_indices) | set(quantity.indices)
    name = prettify_name(build_name(tokens, consumed, rules))
    if not name:
        logger.debug("Dropped line %r (empty name)", line)
        return None

    return ParsedLine(
        name=name,
        unit_price=price.price if price else None,
        quantity=quantity.quantity,
    )

def parse_lines(lines: list[str], rules: LocaleRules, *, require_price: bool = True) -> list[ParsedLine]:
    """Parse lines in order, silently dropping the ones that yield no item."""
    parsed: list[ParsedLine] = []
    for line in lines:
        result = parse_line(line, rules, require_price=require_price)
        if result is not None:
            parsed.append(result)
    return parsed
