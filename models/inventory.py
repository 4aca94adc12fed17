# models/inventory.py

from datetime import datetime
from typing import Optional
from pydantic import Field

from models.base import CamelModel


class InventoryBase(CamelModel):
    property_id: str
    item: str = Field(min_length=1)
    quantity: int = Field(default=0, ge=0)
    # At or below this quantity the item counts as low stock
    threshold: int = Field(default=5, ge=0)
    unit: str = "pieces"
    notes: Optional[str] = None


class InventoryCreate(InventoryBase):
    pass


class InventoryRead(InventoryBase):
    id: str
    last_updated: Optional[datetime] = None


class InventoryUpdate(CamelModel):
    item: Optional[str] = None
    quantity: Optional[int] = Field(default=None, ge=0)
    threshold: Optional[int] = Field(default=None, ge=0)
    unit: Optional[str] = None
    notes: Optional[str] = None
