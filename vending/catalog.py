import logging
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from . import settings
from .errors import ConversionFailure, InvalidResource
from .inventory import InventoryStore
from .parsers import find_parser
from .schemas import InventoryEntry, Item

logger = logging.getLogger(__name__)


def _sort_by_selection_order(df: pd.DataFrame) -> pd.DataFrame:
    """Known selections first in settings.SELECTION_ORDER, the rest in file order."""
    order = {name: position for position, name in enumerate(settings.SELECTION_ORDER)}
    df = df.copy()
    df["_order"] = df["name"].map(order).fillna(len(order))
    df = df.sort_values("_order", kind="stable").drop(columns="_order")
    return df.reset_index(drop=True)


def load(path: Path | str | None = None) -> InventoryStore:
    """
    Builds an InventoryStore from a catalog file (defaults to settings.CATALOG_FILE).

    Raises InvalidResource when the file is missing or its format is unknown,
    and ConversionFailure when its contents can't be turned into stock.
    """
    file_path = Path(path) if path is not None else settings.CATALOG_FILE
    logger.info(f"Loading catalog: {file_path}")

    if not file_path.is_file():
        raise InvalidResource(f"Catalog file not found: {file_path}")

    parser_func = find_parser(file_path)
    if parser_func is None:
        raise InvalidResource(f"Unsupported catalog format: {file_path.suffix or file_path.name}")

    df = parser_func(file_path)
    if df is None:
        raise ConversionFailure(f"Could not parse catalog: {file_path.name}")

    duplicated = df.loc[df["name"].duplicated(), "name"].dropna().unique().tolist()
    if duplicated:
        raise ConversionFailure(f"Duplicate selections in {file_path.name}: {duplicated}")

    df = _sort_by_selection_order(df)

    try:
        entries = [
            InventoryEntry(
                item=Item(name=row["name"], price=row["price"], icon=row["icon"]),
                quantity=row["quantity"],
            )
            for row in df.to_dict("records")
        ]
    except (ValidationError, ValueError) as e:
        logger.error(f"Catalog validation failed for {file_path.name}!")
        logger.error(e)
        raise ConversionFailure(f"Invalid catalog entry in {file_path.name}: {e}") from e

    if not entries:
        logger.warning(f"Catalog {file_path.name} has no selections.")

    inventory = InventoryStore(entries)
    logger.info(f"Loaded {len(inventory)} selections from {file_path.name}.")
    return inventory
