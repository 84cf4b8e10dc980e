from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .utils import to_money


class Item(BaseModel):
    """
    A vendable product as loaded from the catalog. Immutable once loaded.
    The icon is an opaque reference for the front end and defaults to the name.
    """

    name: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    icon: str

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def default_icon(cls, data: Any) -> Any:
        if isinstance(data, dict):
            icon = data.get("icon")
            # Catalog rows coming out of pandas carry NaN for empty cells
            if icon is None or icon != icon or str(icon).strip() == "":
                data = {**data, "icon": data.get("name")}
        return data

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("price", mode="before")
    @classmethod
    def normalize_price(cls, value: Any) -> Decimal:
        return to_money(value)


class InventoryEntry(BaseModel):
    """An item and its stock count. Quantity is the only mutable field."""

    item: Item
    quantity: int = Field(default=0, ge=0)

    class Config:
        validate_assignment = True


class SaleRecord(BaseModel):
    """One successful vend, as written to the sales report."""

    id: str = Field(..., alias="ID")
    selection: str = Field(..., alias="Selection")
    quantity: int = Field(..., ge=1, alias="Quantity")
    unit_price: Decimal = Field(..., ge=0, alias="Unit Price")
    total: Decimal = Field(..., ge=0, alias="Total")
    balance_after: Decimal = Field(..., ge=0, alias="Balance After")
    timestamp: datetime = Field(default_factory=datetime.now, alias="Timestamp")
    icon: Optional[str] = Field(default=None, alias="Icon")

    class Config:
        # Build from python names, export with the report's column headers.
        populate_by_name = True
