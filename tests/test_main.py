import logging
from decimal import Decimal

import pytest

import main
from vending import catalog, data_handler, settings
from vending.machine import VendingMachine


@pytest.fixture
def session(inventory):
    return main.ConsoleSession(VendingMachine(inventory, "5.00"))


def test_select_resets_quantity(session):
    assert session.select("Chips") == "Chips x 1 = $1.50"
    session.quantity = 3
    session.select("Gum")
    assert session.quantity == 1
    assert session.current_selection == "Gum"


def test_select_unknown(session):
    assert session.handle("select Caviar") == "Invalid Selection"
    assert session.current_selection is None


def test_quantity_limited_by_deposit(session):
    session.handle("select Chips")
    assert session.handle("qty 3") == "Chips x 3 = $4.50"
    session.handle("select Sandwich")
    assert session.handle("qty 2").startswith("Insufficient Funds")
    assert session.quantity == 1


def test_quantity_needs_selection(session):
    assert session.handle("qty 2").startswith("No Selection")


@pytest.mark.parametrize("raw", ["0", "-1", "lots"])
def test_bad_quantity(session, raw):
    session.handle("select Chips")
    assert session.handle(f"qty {raw}").startswith("Invalid quantity")
    assert session.quantity == 1


def test_buy(session):
    session.handle("select Chips")
    session.handle("qty 2")
    message = session.handle("buy")

    assert message.startswith("Success")
    assert session.machine.amount_deposited == Decimal("2.00")
    assert session.machine.inventory.quantity("Chips") == 1
    assert session.quantity == 1


def test_buy_without_selection(session):
    assert session.handle("buy").startswith("No Selection")


def test_buy_out_of_stock(session):
    session.handle("select Gum")
    session.handle("buy")
    assert session.handle("buy").startswith("Out of Stock")


def test_buy_insufficient_funds_reports_shortfall(inventory):
    session = main.ConsoleSession(VendingMachine(inventory, "2.00"))
    session.handle("select Sandwich")
    assert session.handle("buy") == (
        "Insufficient Funds: you need $2.00 more in order to buy that item."
    )


def test_deposit(session):
    assert session.handle("deposit").startswith("Deposit Successful")
    assert session.handle("deposit 1.25").endswith("$1.25 to spend.")
    assert session.handle("balance") == "Balance: $11.25"
    assert session.handle("deposit -4").startswith("Invalid deposit")


def test_list_marks_selection(session):
    session.handle("select Gum")
    lines = session.handle("list").splitlines()
    assert len(lines) == 3
    assert lines[2].startswith("* Gum")
    assert "(1 left)" in lines[2]


def test_quit_and_unknown(session):
    assert session.handle("quit") is None
    assert session.handle("dance").startswith("Unknown command")
    assert session.handle("   ") == ""


def test_run_reads_until_quit(session):
    lines = iter(["select Chips", "buy", "quit", "buy"])
    session.run(read_line=lambda prompt: next(lines))
    assert len(session.machine.sales) == 1


def test_run_process_reports_sales(inventory, monkeypatch):
    monkeypatch.setattr(catalog, "load", lambda: inventory)
    monkeypatch.setattr(settings, "STARTING_BALANCE", Decimal("5.00"))
    commands = iter(["select Chips", "buy"])

    def read_line(prompt):
        try:
            return next(commands)
        except StopIteration:
            raise EOFError

    monkeypatch.setattr("builtins.input", read_line)
    posted = []
    monkeypatch.setattr(
        data_handler, "post_to_webhook", lambda **kwargs: posted.append(kwargs)
    )

    assert main.run_process() == 0
    assert list(settings.OUTPUT_DIR.glob("sales_report_*.csv"))
    assert posted[0]["metadata"]["count"] == 1


def test_run_process_catalog_failure(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "CATALOG_FILE", tmp_path / "missing.plist")
    assert main.run_process() == 1


def test_responses_printed_whatever_the_log_level(session, capsys, caplog):
    caplog.set_level(logging.ERROR)
    lines = iter(["select Chips", "buy", "balance", "quit"])
    session.run(read_line=lambda prompt: next(lines))

    out = capsys.readouterr().out
    assert "Chips x 1 = $1.50" in out
    assert "Success" in out
    assert "Balance: $3.50" in out


def test_run_process_saves_sales_on_ctrl_c(inventory, monkeypatch):
    monkeypatch.setattr(catalog, "load", lambda: inventory)
    monkeypatch.setattr(settings, "STARTING_BALANCE", Decimal("5.00"))
    commands = iter(["select Chips", "buy"])

    def read_line(prompt):
        try:
            return next(commands)
        except StopIteration:
            raise KeyboardInterrupt

    monkeypatch.setattr("builtins.input", read_line)
    monkeypatch.setattr(data_handler, "post_to_webhook", lambda **kwargs: None)

    assert main.run_process() == 0
    reports = list(settings.OUTPUT_DIR.glob("sales_report_*.csv"))
    assert len(reports) == 1
    assert "Chips" in reports[0].read_text(encoding="utf-8")


def test_run_process_sales_saved_when_session_crashes(inventory, monkeypatch):
    monkeypatch.setattr(catalog, "load", lambda: inventory)
    monkeypatch.setattr(settings, "STARTING_BALANCE", Decimal("5.00"))
    commands = iter(["select Chips", "buy"])

    def read_line(prompt):
        try:
            return next(commands)
        except StopIteration:
            raise RuntimeError("terminal went away")

    monkeypatch.setattr("builtins.input", read_line)
    monkeypatch.setattr(data_handler, "post_to_webhook", lambda **kwargs: None)

    with pytest.raises(RuntimeError):
        main.run_process()
    assert list(settings.OUTPUT_DIR.glob("sales_report_*.csv"))


def test_run_process_bad_starting_balance(inventory, monkeypatch):
    monkeypatch.setattr(catalog, "load", lambda: inventory)
    monkeypatch.setattr(settings, "STARTING_BALANCE", Decimal("-1.00"))
    assert main.run_process() == 1
