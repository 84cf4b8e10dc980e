import logging
import sys

from vending import catalog, data_handler, settings
from vending.errors import (
    CatalogError,
    InsufficientFunds,
    InvalidDeposit,
    InvalidQuantity,
    InvalidSelection,
    NoSelection,
    OutOfStock,
    VendingMachineError,
)
from vending.logger import setup_logger
from vending.machine import VendingMachine
from vending.utils import format_money

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  list               show the selections
  select <name>      pick an item
  qty <n>            set how many to buy
  deposit [amount]   add money (default {deposit})
  buy                purchase the current selection
  balance            show the deposited amount
  quit               save the sales report and exit"""


class ConsoleSession:
    """Text front end for a VendingMachine. Each command returns the message to show."""

    def __init__(self, machine: VendingMachine):
        self.machine = machine
        self.current_selection = None
        self.quantity = 1

    def reset(self):
        self.quantity = 1

    def total_line(self) -> str:
        if self.current_selection is None:
            return "No item selected."
        total = self.machine.quote(self.current_selection, self.quantity)
        return f"{self.current_selection} x {self.quantity} = {format_money(total)}"

    def handle(self, line: str) -> str | None:
        """Runs one command. Returns None when the session should end."""
        parts = line.strip().split()
        if not parts:
            return ""
        command, args = parts[0].lower(), parts[1:]

        if command in ("quit", "exit"):
            return None
        if command == "help":
            return HELP_TEXT.format(deposit=format_money(settings.DEPOSIT_AMOUNT))
        if command == "list":
            return self.list_items()
        if command == "balance":
            return f"Balance: {format_money(self.machine.amount_deposited)}"
        if command == "select":
            return self.select(" ".join(args))
        if command == "qty":
            return self.set_quantity(args[0] if args else "")
        if command == "deposit":
            return self.deposit(args[0] if args else None)
        if command == "buy":
            return self.purchase()
        return f"Unknown command '{command}'. Type 'help' for the list."

    def list_items(self) -> str:
        lines = []
        for entry in self.machine.inventory.entries():
            marker = "*" if entry.item.name == self.current_selection else " "
            lines.append(
                f"{marker} {entry.item.name:<12} {format_money(entry.item.price):>8}   ({entry.quantity} left)"
            )
        return "\n".join(lines) if lines else "The machine is empty."

    def select(self, name: str) -> str:
        item = self.machine.item_for_selection(name) if name else None
        if item is None:
            return "Invalid Selection"
        self.current_selection = item.name
        self.reset()
        return self.total_line()

    def set_quantity(self, raw: str) -> str:
        if self.current_selection is None:
            return "No Selection: pick an item first."
        try:
            quantity = int(raw)
        except ValueError:
            return f"Invalid quantity: {raw!r}"
        try:
            affordable = self.machine.can_afford(self.current_selection, quantity)
        except InvalidQuantity:
            return f"Invalid quantity: {raw!r}"
        if not affordable:
            return "Insufficient Funds: you have exceeded the deposited amount."
        self.quantity = quantity
        return self.total_line()

    def deposit(self, raw: str | None) -> str:
        try:
            self.machine.deposit(raw)
        except InvalidDeposit:
            return f"Invalid deposit amount: {raw!r}"
        added = format_money(raw if raw is not None else settings.DEPOSIT_AMOUNT)
        return f"Deposit Successful: you have an additional {added} to spend."

    def purchase(self) -> str:
        try:
            self.machine.vend(self.current_selection, self.quantity)
        except NoSelection:
            return "No Selection: pick an item first."
        except OutOfStock:
            return "Out of Stock: sorry, but we are all out of that item."
        except InvalidSelection:
            return "Invalid Selection"
        except InsufficientFunds as e:
            return (
                f"Insufficient Funds: you need {format_money(e.shortfall)} more "
                "in order to buy that item."
            )
        except VendingMachineError as e:
            return f"Error: {e}"
        finally:
            self.reset()
        return (
            "Success: your purchase was successfully done. "
            f"Balance: {format_money(self.machine.amount_deposited)}"
        )

    def run(self, read_line=None):
        """Reads commands until quit, end of input or Ctrl-C. Responses go to stdout."""
        read_line = read_line or input
        print("Type 'help' for the list of commands.")
        while True:
            try:
                line = read_line("> ")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            message = self.handle(line)
            if message is None:
                break
            if message:
                print(message)


def report_sales(machine: VendingMachine):
    """Prints the session summary, then saves and posts the session's sales."""
    print("\n--- Session Summary ---")
    print(f"Sales: {len(machine.sales)} ({format_money(machine.sales_total())})")
    print(f"Remaining balance: {format_money(machine.amount_deposited)}")

    data_handler.save_outputs(machine.sales, settings.SALES_FILENAME_BASE)
    data_handler.post_to_webhook(
        validated_data=machine.sales,
        metadata={
            "count": len(machine.sales),
            "total": str(machine.sales_total()),
            "balance": str(machine.amount_deposited),
        },
        report_type="sales",
    )


def run_process():
    """Loads the catalog, runs a console session, then reports the session's sales."""
    print("--- Starting Vending Machine ---")

    try:
        inventory = catalog.load()
    except CatalogError as e:
        logger.error(f"❌ Could not load the catalog: {e}")
        return 1

    try:
        machine = VendingMachine(inventory)
    except VendingMachineError as e:
        logger.error(f"❌ Invalid starting balance: {e}")
        return 1

    try:
        ConsoleSession(machine).run()
    finally:
        report_sales(machine)

    print("\n--- Session Finished ---")
    return 0


if __name__ == "__main__":
    setup_logger()
    sys.exit(run_process())
