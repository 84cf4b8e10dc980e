from decimal import Decimal

import pytest

from vending import settings
from vending.inventory import InventoryStore
from vending.schemas import InventoryEntry, Item


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "OUTPUT_DIR", tmp_path / "output")
    monkeypatch.setattr(settings, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(settings, "WEBHOOK_URL", None)
    monkeypatch.setattr(settings, "SAVE_JSON_OUTPUT", True)
    monkeypatch.setattr(settings, "STARTING_BALANCE", Decimal("0.00"))
    monkeypatch.setattr(settings, "DEPOSIT_AMOUNT", Decimal("5.00"))


@pytest.fixture
def make_store():
    """Builds a store from (name, price, quantity) tuples."""

    def _make(*rows) -> InventoryStore:
        return InventoryStore(
            InventoryEntry(item=Item(name=name, price=price), quantity=quantity)
            for name, price, quantity in rows
        )

    return _make


@pytest.fixture
def inventory(make_store):
    return make_store(
        ("Chips", "1.50", 3),
        ("Sandwich", "4.00", 2),
        ("Gum", "0.75", 1),
    )
