"""Quantity multiplier detection for a tokenized receipt line."""

from __future__ import annotations

import re
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from typing import Literal

from ..locale_rules import LocaleRules
from .common import _looks_like_price, _positive_int

QuantityRule = Literal["glued", "marker", "count_unit", "leading_integer", "default"]

# "x2", "2x", "X3"
GLUED_MULTIPLIER_PATTERN = re.compile(r"^(?:x(\d+)|(\d+)x)$", re.IGNORECASE)


@dataclass(frozen=True)
class QuantityMatch:
    """Detected quantity and the token positions that expressed it."""

    quantity: int
    indices: tuple[int, ...] = ()
    rule: QuantityRule = "default"


DEFAULT_QUANTITY = QuantityMatch(quantity=1)


def _match_glued(tokens: Sequence[str], skip: Collection[int]) -> QuantityMatch | None:
    for i, token in enumerate(tokens):
        if i in skip:
            continue
        match = GLUED_MULTIPLIER_PATTERN.match(token)
        if not match:
            continue
        quantity = int(match.group(1) or match.group(2))
        if quantity > 0:
            return QuantityMatch(quantity=quantity, indices=(i,), rule="glued")
    return None


def _match_marker(tokens: Sequence[str], rules: LocaleRules, skip: Collection[int]) -> QuantityMatch | None:
    # Longest first so "qty:" wins over "q" on "qty:2".
    markers = sorted(rules.quantity_markers, key=len, reverse=True)
    for i, token in enumerate(tokens):
        if i in skip:
            continue
        lowered = token.lower()
        for marker in markers:
            if not lowered.startswith(marker):
                continue
            rest = lowered[len(marker) :]
            if rest:
                quantity = _positive_int(rest)
                if quantity is not None:
                    return QuantityMatch(quantity=quantity, indices=(i,), rule="marker")
                continue
            if i + 1 < len(tokens) and i + 1 not in skip:
                quantity = _positive_int(tokens[i + 1])
                if quantity is not None:
                    return QuantityMatch(quantity=quantity, indices=(i, i + 1), rule="marker")
    return None


def _match_count_unit(tokens: Sequence[str], rules: LocaleRules, skip: Collection[int]) -> QuantityMatch | None:
    for i in range(len(tokens) - 1):
        if i in skip or i + 1 in skip:
            continue
        quantity = _positive_int(tokens[i])
        if quantity is None:
            continue
        unit = re.sub(r"[^\w]", "", tokens[i + 1].lower())
        if unit in rules.count_units:
            return QuantityMatch(quantity=quantity, indices=(i, i + 1), rule="count_unit")
    return None


def match_explicit_quantity(
    tokens: Sequence[str],
    rules: LocaleRules,
    skip: Collection[int] = frozenset(),
) -> QuantityMatch | None:
    """Rules 1-3: glued multiplier, quantity marker, count-unit pair."""
    return (
        _match_glued(tokens, skip)
        or _match_marker(tokens, rules, skip)
        or _match_count_unit(tokens, rules, skip)
    )


def extract_quantity(
    tokens: Sequence[str],
    rules: LocaleRules,
    skip: Collection[int] = frozenset(),
) -> QuantityMatch:
    """
    Detect how many units a line stands for.

    Falls back to a bare leading integer ("3 Coffee 2.00") when no explicit
    form matches. That heuristic misfires on lines that start with a product
    code; it is kept anyway because leading counts are common on restaurant
    receipts. Positions in ``skip`` (the price) are never used.
    """
    explicit = match_explicit_quantity(tokens, rules, skip)
    if explicit is not None:
        return explicit

    if len(tokens) >= 2 and 0 not in skip and not _looks_like_price(tokens[0], rules):
        quantity = _positive_int(tokens[0])
        if quantity is not None:
            return QuantityMatch(quantity=quantity, indices=(0,), rule="leading_integer")

    return DEFAULT_QUANTITY
