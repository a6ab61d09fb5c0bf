"""Tests for grouping OCR fragments into lines."""

from receiptsplit.domain.bill import TextFragment
from receiptsplit.receipt.line_reconstruction import bucket_fragments, reconstruct_lines


def test_reconstructs_two_lines_top_to_bottom() -> None:
    fragments = [
        TextFragment("Burger", x_center=0.2, y_center=0.80),
        TextFragment("7.99", x_center=0.8, y_center=0.81),
        TextFragment("Fries", x_center=0.2, y_center=0.40),
        TextFragment("3.50", x_center=0.8, y_center=0.41),
    ]

    assert reconstruct_lines(fragments) == ["Burger 7.99", "Fries 3.50"]


def test_orders_fragments_left_to_right_within_a_line() -> None:
    fragments = [
        TextFragment("7,90", x_center=0.9, y_center=0.5),
        TextFragment("Margherita", x_center=0.3, y_center=0.5),
        TextFragment("Pizza", x_center=0.1, y_center=0.505),
    ]

    assert reconstruct_lines(fragments) == ["Pizza Margherita 7,90"]


def test_bucket_estimate_drifts_toward_new_members() -> None:
    fragments = [
        TextFragment("A", x_center=0.1, y_center=0.500),
        TextFragment("B", x_center=0.2, y_center=0.515),
        # Within tolerance of the drifted estimate (0.5075), not of the seed.
        TextFragment("C", x_center=0.3, y_center=0.525),
    ]

    buckets = bucket_fragments(fragments)

    assert len(buckets) == 1
    assert buckets[0].text() == "A B C"


def test_collapses_whitespace_and_drops_blank_lines() -> None:
    fragments = [
        TextFragment("  Acqua   naturale ", x_center=0.1, y_center=0.7),
        TextFragment("1,50", x_center=0.9, y_center=0.7),
        TextFragment("   ", x_center=0.5, y_center=0.3),
    ]

    assert reconstruct_lines(fragments) == ["Acqua naturale 1,50"]


def test_same_input_gives_same_lines() -> None:
    fragments = [
        TextFragment("Caffe", x_center=0.1, y_center=0.61),
        TextFragment("1,20", x_center=0.9, y_center=0.6),
        TextFragment("Cornetto", x_center=0.1, y_center=0.55),
        TextFragment("1,40", x_center=0.9, y_center=0.56),
    ]

    assert reconstruct_lines(fragments) == reconstruct_lines(list(fragments))
    assert reconstruct_lines(fragments) == ["Caffe 1,20", "Cornetto 1,40"]


def test_empty_input() -> None:
    assert reconstruct_lines([]) == []
