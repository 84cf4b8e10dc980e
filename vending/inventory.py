import logging
import threading
from typing import Iterable

from .errors import CatalogError, InvalidQuantity, InvalidSelection, OutOfStock
from .schemas import InventoryEntry, Item

logger = logging.getLogger(__name__)


def selection_key(selection) -> str | None:
    """Resolves a selection (an item name or an Item) to its identifier."""
    if selection is None:
        return None
    if isinstance(selection, Item):
        return selection.name
    return str(selection).strip()


class InventoryStore:
    """
    Ordered stock of vendable items, keyed by item name.

    Quantities only ever go down, and only through decrement(). Callers that
    need to check and then decrement as one step hold `lock` for both; it is
    re-entrant so decrement() can take it again.
    """

    def __init__(self, entries: Iterable[InventoryEntry]):
        self.lock = threading.RLock()
        self._entries: dict[str, InventoryEntry] = {}

        for entry in entries:
            name = entry.item.name
            if name in self._entries:
                raise CatalogError(f"Duplicate selection in catalog: {name}")
            if entry.quantity < 0:
                raise CatalogError(f"Negative quantity for {name}: {entry.quantity}")
            # Own a private copy so outside references can't change stock
            self._entries[name] = entry.model_copy()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, selection) -> bool:
        return selection_key(selection) in self._entries

    def __repr__(self) -> str:
        return f"InventoryStore({len(self)} selections)"

    @property
    def selection(self) -> list[Item]:
        """Items in display order."""
        return [entry.item for entry in self._entries.values()]

    def entries(self) -> list[InventoryEntry]:
        """Snapshot of the current stock; changing it doesn't touch the store."""
        with self.lock:
            return [entry.model_copy() for entry in self._entries.values()]

    def lookup(self, selection) -> Item | None:
        entry = self._entries.get(selection_key(selection))
        return entry.item if entry else None

    def quantity(self, selection) -> int:
        entry = self._entries.get(selection_key(selection))
        return entry.quantity if entry else 0

    def decrement(self, selection, by: int) -> None:
        if isinstance(by, bool) or not isinstance(by, int) or by < 0:
            raise InvalidQuantity(by)

        with self.lock:
            name = selection_key(selection)
            entry = self._entries.get(name)
            if entry is None:
                raise InvalidSelection(selection)
            if entry.quantity - by < 0:
                raise OutOfStock(name, by, entry.quantity)

            entry.quantity -= by
            logger.debug(f"{name}: stock {entry.quantity + by} -> {entry.quantity}")
