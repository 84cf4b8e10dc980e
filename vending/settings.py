import os
from decimal import Decimal, InvalidOperation
from pathlib import Path
from dotenv import load_dotenv

# --- Base Directory ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Load Environment Variables ---
load_dotenv(BASE_DIR / ".env")

# --- Path Configuration ---
DATA_DIR = BASE_DIR / os.getenv("DATA_DIR", "data")
OUTPUT_DIR = BASE_DIR / os.getenv("OUTPUT_DIR", "output")
LOG_DIR = BASE_DIR / os.getenv("LOG_DIR", "logs")

# --- Filename Configuration ---
CATALOG_FILENAME = os.getenv("CATALOG_FILENAME", "VendingInventory.plist")
CATALOG_FILE = DATA_DIR / CATALOG_FILENAME
SALES_FILENAME_BASE = os.getenv("SALES_FILENAME_BASE", "sales_report")
SAVE_JSON_OUTPUT = os.getenv("SAVE_JSON_OUTPUT", "true").lower() in ("1", "true", "yes")


# --- Money ---
def money_from_env(name: str, default: str, allow_zero: bool = True) -> Decimal:
    """Reads a money amount from the environment; refuses malformed or negative values."""
    raw = os.getenv(name, default)
    try:
        amount = Decimal(raw.strip())
    except InvalidOperation:
        raise ValueError(f"{name} must be a money amount, got {raw!r}") from None
    if not amount.is_finite() or amount < 0 or (amount == 0 and not allow_zero):
        raise ValueError(f"{name} is out of range: {raw!r}")
    return amount


STARTING_BALANCE = money_from_env("STARTING_BALANCE", "0.00")
DEPOSIT_AMOUNT = money_from_env("DEPOSIT_AMOUNT", "5.00", allow_zero=False)

# --- Webhook ---
WEBHOOK_URL = os.getenv("WEBHOOK_URL")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
# Terminal only shows problems; the console UI owns stdout.
CONSOLE_LOG_LEVEL = os.getenv("CONSOLE_LOG_LEVEL", "WARNING").upper()
LOG_FILENAME = os.getenv("LOG_FILENAME", "vending.log")
LOG_MAX_BYTES = int(os.getenv("LOG_MAX_BYTES", str(5 * 1024 * 1024)))  # 5 MB
LOG_BACKUP_COUNT = int(os.getenv("LOG_BACKUP_COUNT", "3"))

# --- Shared Business Logic ---
# Grid order for the machine's selections. Catalog names missing from
# this list are shown after these, in file order.
SELECTION_ORDER = [
    "Soda",
    "DietSoda",
    "Chips",
    "Cookie",
    "Sandwich",
    "Wrap",
    "CandyBar",
    "PopTart",
    "Water",
    "FruitJuice",
    "SportsDrink",
    "Gum",
]
