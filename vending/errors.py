from decimal import Decimal


class VendingMachineError(Exception):
    """Base class for every failed vend. State is never modified when one is raised."""


class InvalidSelection(VendingMachineError):
    def __init__(self, selection=None):
        self.selection = selection
        super().__init__(f"Invalid selection: {selection!r}")


class NoSelection(InvalidSelection):
    def __init__(self):
        super().__init__(None)
        self.args = ("No item selected",)


class OutOfStock(VendingMachineError):
    def __init__(self, selection: str, requested: int, available: int):
        self.selection = selection
        self.requested = requested
        self.available = available
        super().__init__(
            f"{selection}: requested {requested}, only {available} in stock"
        )


class InsufficientFunds(VendingMachineError):
    def __init__(self, shortfall: Decimal):
        # Amount still needed to afford the purchase
        self.shortfall = shortfall
        super().__init__(f"Insufficient funds: ${shortfall} more required")


class InvalidQuantity(VendingMachineError):
    def __init__(self, quantity):
        self.quantity = quantity
        super().__init__(f"Invalid quantity: {quantity!r}")


class InvalidDeposit(VendingMachineError):
    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Deposit must be a positive amount, got {amount!r}")


class CatalogError(Exception):
    """Raised when the static catalog can't be turned into an inventory."""


class InvalidResource(CatalogError):
    pass


class ConversionFailure(CatalogError):
    pass
