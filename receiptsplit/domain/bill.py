"""Data models for receipt recognition and bill splitting."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class TextFragment:
    """One OCR-recognized text span with its normalized position.

    Coordinates are in [0, 1]. The y-axis origin is at the BOTTOM of the
    page: y = 1 is the top edge, so larger y means higher on the receipt.
    """

    text: str
    x_center: float
    y_center: float


@dataclass(frozen=True)
class ParsedLine:
    """An accepted receipt line reduced to name, unit price and quantity."""

    name: str
    unit_price: Decimal | None
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {self.quantity}")


@dataclass(frozen=True)
class AggregationKey:
    """Dedup key: two lines describe the same item iff both fields match."""

    normalized_name: str
    unit_price: Decimal | None


@dataclass
class AggregationEntry:
    """Accumulator for one distinct item; first occurrence fixes name and price."""

    display_name: str
    unit_price: Decimal | None
    quantity: int


@dataclass
class BillItem:
    """A single item on the bill, as shown to the people splitting it."""

    name: str
    price: Decimal | None
    quantity: int = 1
    is_selected: bool = True
    assigned_people: set[str] = field(default_factory=set)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def is_priced(self) -> bool:
        return self.price is not None

    def to_dict(self) -> dict[str, object]:
        """JSON-friendly representation; prices are rendered as strings."""
        return {
            "id": self.id,
            "name": self.name,
            "price": str(self.price) if self.price is not None else None,
            "quantity": self.quantity,
            "is_selected": self.is_selected,
            "assigned_people": sorted(self.assigned_people),
        }
