import logging
import plistlib
import pandas as pd
from pathlib import Path

from .utils import load_csv

logger = logging.getLogger(__name__)

# Standard internal shape every catalog parser produces.
CATALOG_COLUMNS = ["name", "price", "quantity", "icon"]


def _normalize_catalog_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Restricts a parsed catalog to the standard columns, adding any optional ones."""
    df = df.copy()
    if "icon" not in df.columns:
        df["icon"] = None
    df["name"] = df["name"].str.strip()
    return df[CATALOG_COLUMNS].reset_index(drop=True)


def parse_plist_catalog(file_path: Path) -> pd.DataFrame | None:
    """
    Loads a property list catalog into the standard catalog format.

    The root is a dictionary keyed by item name; each value is a dictionary
    with 'price' and 'quantity' and, optionally, 'icon'.
    """
    try:
        with open(file_path, "rb") as f:
            raw = plistlib.load(f)
    except FileNotFoundError:
        logger.info(f"Catalog not found at {file_path}, skipping.")
        return None
    except Exception as e:
        logger.error(f"Could not read property list {file_path.name}. Reason: {e}")
        return None

    if not isinstance(raw, dict):
        logger.error(
            f"{file_path.name}: expected a dictionary at the root, got {type(raw).__name__}."
        )
        return None

    rows = []
    for name, attributes in raw.items():
        if not isinstance(attributes, dict):
            logger.error(f"{file_path.name}: entry '{name}' is not a dictionary.")
            return None
        rows.append(
            {
                "name": str(name),
                "price": attributes.get("price"),
                "quantity": attributes.get("quantity"),
                "icon": attributes.get("icon"),
            }
        )

    df = pd.DataFrame(rows, columns=CATALOG_COLUMNS)
    logger.info(f"Parsed {file_path.name} ({len(df)} selections).")
    return _normalize_catalog_frame(df)


def parse_csv_catalog(file_path: Path) -> pd.DataFrame | None:
    """
    Loads a CSV catalog with 'name', 'price', 'quantity' and an optional
    'icon' column. Header case and surrounding spaces are ignored.
    """
    # Read everything as text so prices never pass through float
    df = load_csv(file_path, dtype=str)
    if df is None:
        return None

    df = df.rename(columns=lambda col: str(col).strip().lower())
    missing = [col for col in ("name", "price", "quantity") if col not in df.columns]
    if missing:
        logger.error(f"{file_path.name}: missing required columns {missing}.")
        return None

    logger.info(f"Parsed {file_path.name} ({len(df)} selections).")
    return _normalize_catalog_frame(df)


# --- Parser Registry ---
# Catalog formats keyed by file suffix.
PARSER_REGISTRY = [
    {
        "format": "plist",
        "suffixes": (".plist",),
        "parser_func": parse_plist_catalog,
    },
    {
        "format": "csv",
        "suffixes": (".csv",),
        "parser_func": parse_csv_catalog,
    },
]


def find_parser(file_path: Path):
    suffix = file_path.suffix.lower()
    for parser_config in PARSER_REGISTRY:
        if suffix in parser_config["suffixes"]:
            return parser_config["parser_func"]
    return None
