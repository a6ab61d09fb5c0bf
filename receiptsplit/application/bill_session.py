"""The shared, observable item list for one bill."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from decimal import Decimal

from receiptsplit.domain.bill import BillItem
from receiptsplit.domain.split import person_total
from receiptsplit.runtime.logging import get_logger

logger = get_logger(__name__)

SessionListener = Callable[["BillSession"], None]


class BillSession:
    """Owns the committed items of one bill plus analysis status.

    The recognition orchestrator replaces ``items`` wholesale through
    ``commit``; UI surfaces edit them through the mutation methods. Mutations
    addressed to an index that does not exist are ignored. Every effective
    change notifies subscribed listeners.
    """

    def __init__(self) -> None:
        self._items: list[BillItem] = []
        self.is_analyzing: bool = False
        self.last_error: str | None = None
        self.bill_image: bytes | None = None
        self._listeners: list[SessionListener] = []

    @property
    def items(self) -> list[BillItem]:
        """A snapshot of the current items, in display order."""
        return list(self._items)

    # --- Change notification ---
    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _in_range(self, index: int, operation: str) -> bool:
        if 0 <= index < len(self._items):
            return True
        logger.debug("Ignoring %s for out-of-range index %d (have %d items)", operation, index, len(self._items))
        return False

    # --- Orchestrator operations ---
    def begin_analysis(self, image: bytes | None = None) -> None:
        self.is_analyzing = True
        if image is not None:
            self.bill_image = image
        self.notify()

    def end_analysis(self) -> None:
        self.is_analyzing = False
        self.notify()

    def commit(self, items: Iterable[BillItem]) -> None:
        """Replace the whole batch and clear any error; batches never merge."""
        self._items = list(items)
        self.last_error = None
        self.notify()

    def set_error(self, message: str | None) -> None:
        self.last_error = message
        self.notify()

    def reset(self) -> None:
        """Drop all items and the last error."""
        self._items = []
        self.last_error = None
        self.notify()

    # --- UI editing operations ---
    def toggle_selected(self, index: int) -> None:
        if not self._in_range(index, "toggle_selected"):
            return
        item = self._items[index]
        item.is_selected = not item.is_selected
        self.notify()

    def set_quantity(self, index: int, quantity: int) -> None:
        if not self._in_range(index, "set_quantity"):
            return
        if quantity < 1:
            logger.debug("Ignoring quantity %d for item %d; quantity must be >= 1", quantity, index)
            return
        self._items[index].quantity = quantity
        self.notify()

    def set_assigned_people(self, index: int, people: Iterable[str]) -> None:
        if not self._in_range(index, "set_assigned_people"):
            return
        self._items[index].assigned_people = set(people)
        self.notify()

    def delete_item(self, index: int) -> None:
        if not self._in_range(index, "delete_item"):
            return
        del self._items[index]
        self.notify()

    def move_item(self, source: int, destination: int) -> None:
        """Move the item at ``source`` so it ends up at ``destination``."""
        if not self._in_range(source, "move_item") or not self._in_range(destination, "move_item"):
            return
        if source == destination:
            return
        item = self._items.pop(source)
        self._items.insert(destination, item)
        self.notify()

    # --- Queries ---
    def total_for(self, person_id: str) -> Decimal:
        return person_total(self._items, person_id)
