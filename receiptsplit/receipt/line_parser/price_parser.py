"""Unit-price selection for a tokenized receipt line."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from ..locale_rules import LocaleRules
from .common import PERCENT_TOKEN_PATTERN, _has_alpha, _numeric_value

PriceRule = Literal["currency_glyph", "marker", "fallback"]


@dataclass(frozen=True)
class PriceMatch:
    """The chosen price and the token positions it consumed."""

    price: Decimal
    indices: tuple[int, ...]
    rule: PriceRule


def is_tax_disqualified(tokens: Sequence[str], idx: int, rules: LocaleRules) -> bool:
    """True if the number at ``idx`` is tax noise ("IVA 10,00", "10%", "4,00 VAT")."""
    token = tokens[idx]
    if PERCENT_TOKEN_PATTERN.match(token) or "%" in token:
        return True
    if idx > 0 and rules.is_tax_word(tokens[idx - 1]):
        return True
    if idx + 1 < len(tokens) and rules.is_tax_word(tokens[idx + 1]):
        return True
    return False


def _candidate(tokens: Sequence[str], idx: int, rules: LocaleRules, skip: Collection[int]) -> Decimal | None:
    if idx < 0 or idx >= len(tokens) or idx in skip:
        return None
    value = _numeric_value(tokens[idx], rules)
    if value is None or is_tax_disqualified(tokens, idx, rules):
        return None
    return value


def _name_remains(tokens: Sequence[str], consumed: Collection[int], rules: LocaleRules) -> bool:
    remaining = [token for i, token in enumerate(tokens) if i not in consumed and not rules.is_currency_marker(token)]
    return _has_alpha(remaining)


def extract_price(
    tokens: Sequence[str],
    rules: LocaleRules,
    skip: Collection[int] = frozenset(),
) -> PriceMatch | None:
    """
    Select at most one unit price from ``tokens``.

    Rules, first success wins:
    1. A currency glyph glued to digits ("€7,90", "7,90€").
    2. A standalone currency/price-word marker next to a number ("EUR 7,90", "7.90 €").
    3. The right-most number on the line.

    Tax-adjacent numbers and percentages are never chosen, and every rule
    requires some alphabetic text to remain for the item name. Positions in
    ``skip`` (already claimed as a quantity) are ignored.
    """
    for i, token in enumerate(tokens):
        if not rules.has_currency_glyph(token):
            continue
        value = _candidate(tokens, i, rules, skip)
        if value is not None and _name_remains(tokens, (i,), rules):
            return PriceMatch(price=value, indices=(i,), rule="currency_glyph")

    for i, token in enumerate(tokens):
        if i in skip or not rules.is_marker(token):
            continue
        for j in (i + 1, i - 1):
            value = _candidate(tokens, j, rules, skip)
            if value is None:
                continue
            consumed = (i, j)
            remaining = [t for k, t in enumerate(tokens) if k not in consumed and not rules.is_marker(t)]
            if _has_alpha(remaining):
                return PriceMatch(price=value, indices=tuple(sorted(consumed)), rule="marker")

    for i in reversed(range(len(tokens))):
        value = _candidate(tokens, i, rules, skip)
        if value is None:
            continue
        if _has_alpha(token for k, token in enumerate(tokens) if k != i):
            return PriceMatch(price=value, indices=(i,), rule="fallback")
        return None

    return None
