from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from pathlib import Path
import logging
import pandas as pd

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def to_money(value) -> Decimal:
    """
    Normalizes a price or balance to a Decimal rounded to cents.
    Floats go through str() first so 1.1 becomes Decimal('1.10'), not
    the binary approximation.
    """
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, str)):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Not a money amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Not a money amount: {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    return f"${to_money(value):,.2f}"


def load_csv(file_path: Path, dtype=None) -> pd.DataFrame | None:
    """
    CSV loader with an encoding fallback.
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which can read any byte sequence.
    Returns None when the file is missing or unreadable.
    """
    try:
        return pd.read_csv(file_path, encoding="utf-8-sig", dtype=dtype)

    except UnicodeDecodeError:
        logger.info(
            f"UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'."
        )
        try:
            return pd.read_csv(file_path, encoding="latin-1", dtype=dtype)
        except Exception as e_latin1:
            logger.error(
                f"Could not read {file_path.name} even with latin-1. Reason: {e_latin1}"
            )
            return None

    except FileNotFoundError:
        logger.info(f"File not found at {file_path}, skipping.")
        return None

    except Exception as e_general:
        logger.error(
            f"An unexpected error occurred while reading {file_path.name}. Reason: {e_general}"
        )
        return None
