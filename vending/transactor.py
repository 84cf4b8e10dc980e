"""
Purchase rules for a vending machine.

Checks always run in the same order so a request that breaks several rules
reports the same error every time:

1. the selection names a known item
2. the quantity is a positive whole number
3. the balance covers price * quantity
4. there is enough stock

Nothing is changed unless every check passes.
"""
import logging
from decimal import Decimal

from .errors import InsufficientFunds, InvalidQuantity, InvalidSelection, NoSelection, OutOfStock
from .inventory import InventoryStore
from .schemas import Item
from .utils import to_money

logger = logging.getLogger(__name__)


def _resolve(inventory: InventoryStore, selection) -> Item:
    if selection is None:
        raise NoSelection()
    item = inventory.lookup(selection)
    if item is None:
        raise InvalidSelection(selection)
    return item


def _check_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantity(quantity)
    return quantity


def quote(inventory: InventoryStore, selection, quantity: int = 1) -> Decimal:
    """Total price for `quantity` units of `selection`. Stock is not checked."""
    item = _resolve(inventory, selection)
    quantity = _check_quantity(quantity)
    return to_money(item.price * quantity)


def vend(inventory: InventoryStore, selection, quantity: int, balance) -> Decimal:
    """
    Sells `quantity` units of `selection` against `balance`.

    Returns the remaining balance. Raises NoSelection, InvalidSelection,
    InvalidQuantity, InsufficientFunds or OutOfStock; on any of those the
    inventory is left exactly as it was.
    """
    balance = to_money(balance)
    if balance < 0:
        raise ValueError(f"Balance can't be negative: {balance}")

    with inventory.lock:
        item = _resolve(inventory, selection)
        quantity = _check_quantity(quantity)
        total = to_money(item.price * quantity)

        if balance < total:
            raise InsufficientFunds(total - balance)

        available = inventory.quantity(item.name)
        if available < quantity:
            raise OutOfStock(item.name, quantity, available)

        inventory.decrement(item.name, quantity)

    logger.info(f"Vended {quantity} x {item.name} for ${total}")
    return balance - total
