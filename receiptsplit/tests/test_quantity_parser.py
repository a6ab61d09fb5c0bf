"""Tests for quantity multiplier detection."""

import pytest

from receiptsplit.receipt.line_parser.common import tokenize
from receiptsplit.receipt.line_parser.quantity_parser import extract_quantity, match_explicit_quantity
from receiptsplit.receipt.locale_rules import LocaleRules


@pytest.mark.parametrize(
    ("line", "quantity", "indices"),
    [
        ("x2 Burger 7.99", 2, (0,)),
        ("Burger 3X 7.99", 3, (1,)),
        ("Burger qty 4 7.99", 4, (1, 2)),
        ("Burger qty:5 7.99", 5, (1,)),
        ("Burger Q: 2 7.99", 2, (1, 2)),
        ("Burger 2 pcs 3.50", 2, (1, 2)),
        ("Acqua 6 pz. 3,00", 6, (1, 2)),
    ],
)
def test_explicit_forms(it_en_rules: LocaleRules, line: str, quantity: int, indices: tuple[int, ...]) -> None:
    match = extract_quantity(tokenize(line), it_en_rules)

    assert match.quantity == quantity
    assert match.indices == indices


def test_zero_multipliers_are_ignored(it_en_rules: LocaleRules) -> None:
    assert extract_quantity(tokenize("Burger x0 7.99"), it_en_rules).quantity == 1
    assert extract_quantity(tokenize("Burger qty 0 7.99"), it_en_rules).quantity == 1


def test_marker_prefix_needs_digits(it_en_rules: LocaleRules) -> None:
    # "quattro" starts with the "q" marker but carries no number.
    assert match_explicit_quantity(tokenize("Pizza quattro formaggi 9,00"), it_en_rules) is None


def test_leading_integer_fallback(it_en_rules: LocaleRules) -> None:
    tokens = tokenize("3 Coffee 2.00")

    match = extract_quantity(tokens, it_en_rules, skip={2})

    assert match.quantity == 3
    assert match.indices == (0,)
    assert match.rule == "leading_integer"


def test_leading_price_is_not_a_quantity(it_en_rules: LocaleRules) -> None:
    assert extract_quantity(tokenize("2,50 Coffee"), it_en_rules).quantity == 1
    assert extract_quantity(tokenize("€3 Coffee"), it_en_rules).quantity == 1


def test_leading_integer_needs_two_tokens(it_en_rules: LocaleRules) -> None:
    assert extract_quantity(tokenize("3"), it_en_rules).quantity == 1


def test_leading_integer_never_takes_the_price_token(it_en_rules: LocaleRules) -> None:
    match = extract_quantity(tokenize("3 Coffee"), it_en_rules, skip={0})

    assert match.quantity == 1
    assert match.indices == ()


def test_default_quantity(it_en_rules: LocaleRules) -> None:
    match = extract_quantity(tokenize("Burger 7.99"), it_en_rules)

    assert match.quantity == 1
    assert match.rule == "default"
