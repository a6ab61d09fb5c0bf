"""Tests for unit-price selection."""

from decimal import Decimal

import pytest

from receiptsplit.receipt.line_parser import parse_line
from receiptsplit.receipt.line_parser.common import _parse_decimal, tokenize
from receiptsplit.receipt.line_parser.price_parser import extract_price, is_tax_disqualified
from receiptsplit.receipt.locale_rules import LocaleRules


def _price(line: str, rules: LocaleRules) -> Decimal | None:
    match = extract_price(tokenize(line), rules)
    return match.price if match else None


@pytest.mark.parametrize("line", ["Pizza €7,90", "Pizza 7.90 €", "Pizza 7,90€", "Pizza EUR 7,90", "Pizza € 7,90"])
def test_currency_notations_normalize_to_same_value(it_en_rules: LocaleRules, line: str) -> None:
    assert _price(line, it_en_rules) == Decimal("7.90")


def test_glued_currency_glyph_wins_over_other_numbers(it_en_rules: LocaleRules) -> None:
    match = extract_price(tokenize("Menu 2 €12,50 extra 3"), it_en_rules)

    assert match is not None
    assert match.price == Decimal("12.50")
    assert match.rule == "currency_glyph"
    assert match.indices == (2,)


def test_marker_pair_consumes_both_tokens(it_en_rules: LocaleRules) -> None:
    match = extract_price(tokenize("Lasagne prezzo 9,00"), it_en_rules)

    assert match is not None
    assert match.price == Decimal("9.00")
    assert match.rule == "marker"
    assert match.indices == (1, 2)


def test_fallback_takes_right_most_number(it_en_rules: LocaleRules) -> None:
    match = extract_price(tokenize("Birra 0,33 lt 4,50"), it_en_rules)

    assert match is not None
    assert match.price == Decimal("4.50")
    assert match.rule == "fallback"


def test_percentage_and_tax_numbers_are_never_prices(it_en_rules: LocaleRules) -> None:
    assert _price("Pizza IVA 10% 8.00", it_en_rules) == Decimal("8.00")
    assert _price("Pasta 9,00 tassa IVA 0,82", it_en_rules) == Decimal("9.00")
    assert _price("Coperto IVA 2,00", it_en_rules) is None


def test_tax_disqualification_checks_neighbours(it_en_rules: LocaleRules) -> None:
    tokens = tokenize("Vino 4,00 VAT 12,00")

    assert is_tax_disqualified(tokens, 1, it_en_rules)
    assert is_tax_disqualified(tokens, 3, it_en_rules)
    assert not is_tax_disqualified(tokenize("Vino rosso 12,00"), 2, it_en_rules)


def test_line_without_alphabetic_text_has_no_price(it_en_rules: LocaleRules) -> None:
    assert _price("12,00", it_en_rules) is None
    assert _price("€ 12,00", it_en_rules) is None
    assert _price("1234 5678", it_en_rules) is None


def test_malformed_numbers_mean_no_price(it_en_rules: LocaleRules) -> None:
    assert _price("Torta 1.2.3", it_en_rules) is None
    assert _price("Torta -", it_en_rules) is None
    assert _price("Torta abc", it_en_rules) is None


def test_skipped_positions_are_ignored(it_en_rules: LocaleRules) -> None:
    match = extract_price(tokenize("Acqua 2 4,00"), it_en_rules, skip={2})

    assert match is not None
    assert match.price == Decimal("2")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("7,90", Decimal("7.90")),
        ("7.90", Decimal("7.90")),
        ("1,234.50", Decimal("1234.50")),
        ("€7,90", Decimal("7.90")),
        ("8.99H", Decimal("8.99")),
        ("-1,50", Decimal("-1.50")),
        ("1.234.567", None),
        ("1,234,56", None),
        ("", None),
        ("-", None),
    ],
)
def test_parse_decimal_normalization(text: str, expected: Decimal | None) -> None:
    assert _parse_decimal(text) == expected


def test_parse_decimal_is_exact() -> None:
    value = _parse_decimal("0,10")

    assert value is not None
    assert value + value + value == Decimal("0.30")


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("Burger 7.99EUR", Decimal("7.99")),
        ("Pizza 8,00*", Decimal("8.00")),
        ("Acqua (2,00)", Decimal("2.00")),
        ("Vino 12,00A", Decimal("12.00")),
    ],
)
def test_price_tokens_with_receipt_suffixes(it_en_rules: LocaleRules, line: str, expected: Decimal) -> None:
    parsed = parse_line(line, it_en_rules)

    assert parsed is not None
    assert parsed.unit_price == expected
    assert parsed.name == line.split()[0]


def test_letters_before_or_inside_a_number_are_not_prices(it_en_rules: LocaleRules) -> None:
    assert _price("Lotto A12", it_en_rules) is None
    assert _price("Scadenza 12/03/2025", it_en_rules) is None
    assert _price("Codice 1O5", it_en_rules) is None
