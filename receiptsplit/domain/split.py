"""Pure helpers for splitting a bill between people."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from receiptsplit.domain.bill import BillItem


def person_total(items: Iterable[BillItem], person_id: str) -> Decimal:
    """Return what ``person_id`` owes: each assigned item's price split evenly.

    Items without a price or without anyone assigned are skipped.
    """
    total = Decimal("0")
    for item in items:
        if item.price is None or not item.assigned_people:
            continue
        if person_id in item.assigned_people:
            total += item.price / Decimal(len(item.assigned_people))
    return total


def unassigned_items(items: Iterable[BillItem]) -> list[BillItem]:
    """Return selected, priced items that nobody has been assigned to yet."""
    return [item for item in items if item.is_selected and item.price is not None and not item.assigned_people]
