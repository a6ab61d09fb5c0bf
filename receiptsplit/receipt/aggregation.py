"""Merge duplicate receipt lines into bill items, keeping first-seen order."""

from __future__ import annotations

from collections.abc import Iterable

from receiptsplit.domain.bill import AggregationEntry, AggregationKey, BillItem, ParsedLine

from .line_parser.names import normalize_name, prettify_name


class ItemAggregator:
    """Accumulates parsed lines keyed by (normalized name, unit price).

    The first line seen for a key fixes its display name and price; later
    lines only add to the quantity. When OCR spells the same item differently
    or reads a different price, the lines stay separate entries.
    """

    def __init__(self) -> None:
        self._order: list[AggregationKey] = []
        self._entries: dict[AggregationKey, AggregationEntry] = {}

    def __len__(self) -> int:
        return len(self._order)

    def add(self, line: ParsedLine) -> None:
        if not line.name.strip():
            return
        key = AggregationKey(normalized_name=normalize_name(line.name), unit_price=line.unit_price)
        entry = self._entries.get(key)
        if entry is None:
            self._order.append(key)
            self._entries[key] = AggregationEntry(
                display_name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
            )
        else:
            entry.quantity += line.quantity

    def add_all(self, lines: Iterable[ParsedLine]) -> None:
        for line in lines:
            self.add(line)

    def keys(self) -> list[AggregationKey]:
        return list(self._order)

    def entry(self, key: AggregationKey) -> AggregationEntry:
        return self._entries[key]

    def to_bill_items(self) -> list[BillItem]:
        """Emit one fresh BillItem per distinct key, in first-seen order."""
        items: list[BillItem] = []
        for key in self._order:
            entry = self._entries[key]
            items.append(
                BillItem(
                    name=prettify_name(entry.display_name),
                    price=entry.unit_price,
                    quantity=max(1, entry.quantity),
                )
            )
        return items


def aggregate_lines(lines: Iterable[ParsedLine]) -> list[BillItem]:
    """Aggregate parsed lines into bill items."""
    aggregator = ItemAggregator()
    aggregator.add_all(lines)
    return aggregator.to_bill_items()
