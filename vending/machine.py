import logging
import threading
import uuid
from decimal import Decimal

from . import settings, transactor
from .errors import InvalidDeposit, VendingMachineError
from .inventory import InventoryStore
from .schemas import Item, SaleRecord
from .utils import to_money

logger = logging.getLogger(__name__)


class VendingMachine:
    """
    One vending session: an inventory, the money deposited so far, and the
    sales made with it.
    """

    def __init__(self, inventory: InventoryStore, amount_deposited=None):
        self.inventory = inventory
        if amount_deposited is None:
            amount_deposited = settings.STARTING_BALANCE
        self.amount_deposited = to_money(amount_deposited)
        if self.amount_deposited < 0:
            raise InvalidDeposit(amount_deposited)
        self.sales: list[SaleRecord] = []
        self._lock = threading.Lock()

    @property
    def selection(self) -> list[Item]:
        return self.inventory.selection

    def item_for_selection(self, selection) -> Item | None:
        return self.inventory.lookup(selection)

    def deposit(self, amount=None) -> Decimal:
        """Adds money to the balance (settings.DEPOSIT_AMOUNT by default) and returns the new balance."""
        if amount is None:
            amount = settings.DEPOSIT_AMOUNT
        try:
            value = to_money(amount)
        except ValueError as e:
            raise InvalidDeposit(amount) from e
        if value <= 0:
            raise InvalidDeposit(amount)

        with self._lock:
            self.amount_deposited += value
            logger.info(f"Deposited ${value}. Balance: ${self.amount_deposited}")
            return self.amount_deposited

    def quote(self, selection, quantity: int = 1) -> Decimal:
        return transactor.quote(self.inventory, selection, quantity)

    def can_afford(self, selection, quantity: int = 1) -> bool:
        """True when the current balance covers `quantity` units of `selection`."""
        return self.quote(selection, quantity) <= self.amount_deposited

    def vend(self, selection, quantity: int = 1) -> SaleRecord:
        """
        Buys `quantity` units of `selection` with the deposited money.
        On failure the error is re-raised and balance, stock and sales are unchanged.
        """
        with self._lock:
            try:
                new_balance = transactor.vend(
                    self.inventory, selection, quantity, self.amount_deposited
                )
            except VendingMachineError as e:
                logger.warning(f"Vend failed: {e}")
                raise

            item = self.inventory.lookup(selection)
            total = self.amount_deposited - new_balance
            self.amount_deposited = new_balance

            record = SaleRecord(
                id=uuid.uuid4().hex,
                selection=item.name,
                quantity=quantity,
                unit_price=item.price,
                total=total,
                balance_after=new_balance,
                icon=item.icon,
            )
            self.sales.append(record)
            return record

    def sales_total(self) -> Decimal:
        return sum((record.total for record in self.sales), Decimal("0.00"))
