"""Shared patterns and helpers for receipt line parsing."""

import re
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation

from ..locale_rules import LocaleRules

# A token that can carry a price once currency glyphs are removed: a number
# optionally wrapped in punctuation ("(2,00)", "8,00*") and optionally followed
# by letters ("7.99EUR", "12,00A", "8.99H"). Letters before the number or
# other separators inside it ("A12", "12/03") mean it is not a price.
PRICE_TOKEN_PATTERN = re.compile(r"^[^\w\s]*-?\d[\d.,]*[^\W\d_]*[^\w\s]*$")

# Standalone percentage such as "10%" or "4%"
PERCENT_TOKEN_PATTERN = re.compile(r"^\d{1,2}%$")

DIGITS_PATTERN = re.compile(r"^\d+$")


def tokenize(line: str) -> list[str]:
    """Split a line on whitespace runs; tabs count as spaces."""
    return line.replace("\t", " ").split()


def _normalize_number(text: str) -> str | None:
    """Reduce a token to a decimal literal, or None if nothing numeric remains.

    A lone comma is the decimal separator ("7,90"); when a dot is present,
    commas are thousands separators ("1,234.50").
    """
    cleaned = re.sub(r"[^0-9.,-]", "", text)
    if not cleaned:
        return None
    if "," in cleaned and "." not in cleaned:
        return cleaned.replace(",", ".")
    return cleaned.replace(",", "")


def _parse_decimal(text: str) -> Decimal | None:
    """Parse a token as an exact decimal; malformed input means no price."""
    normalized = _normalize_number(text)
    if normalized is None or normalized.count(".") > 1:
        return None
    try:
        value = Decimal(normalized)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def _numeric_value(token: str, rules: LocaleRules) -> Decimal | None:
    """Return the token's value if it is a price candidate."""
    stripped = rules.strip_currency_glyphs(token)
    if not PRICE_TOKEN_PATTERN.match(stripped):
        return None
    return _parse_decimal(stripped)


def _looks_like_price(token: str, rules: LocaleRules) -> bool:
    """True if the token reads as a money amount rather than a bare count."""
    if _numeric_value(token, rules) is None:
        return False
    stripped = rules.strip_currency_glyphs(token)
    return "." in stripped or "," in stripped or rules.has_currency_glyph(token)


def _positive_int(token: str) -> int | None:
    if not DIGITS_PATTERN.match(token):
        return None
    value = int(token)
    return value if value > 0 else None


def _has_alpha(tokens: Iterable[str]) -> bool:
    return any(ch.isalpha() for token in tokens for ch in token)
