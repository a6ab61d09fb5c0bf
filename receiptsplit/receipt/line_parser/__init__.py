"""Composable receipt line parser components."""

from .classifier import LineClassification, classify_line, is_item_candidate
from .common import tokenize
from .line_items import parse_line, parse_lines
from .names import build_name, normalize_name, prettify_name
from .price_parser import PriceMatch, extract_price, is_tax_disqualified
from .quantity_parser import QuantityMatch, extract_quantity, match_explicit_quantity

__all__ = [
    "LineClassification",
    "PriceMatch",
    "QuantityMatch",
    "build_name",
    "classify_line",
    "extract_price",
    "extract_quantity",
    "is_item_candidate",
    "is_tax_disqualified",
    "match_explicit_quantity",
    "normalize_name",
    "parse_line",
    "parse_lines",
    "prettify_name",
    "tokenize",
]
