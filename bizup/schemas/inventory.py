from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class StockStatus(str, Enum):
    OUT_OF_STOCK = "out_of_stock"
    LOW = "low"
    NORMAL = "normal"

    @property
    def label(self) -> str:
        return {"out_of_stock": "품절", "low": "부족", "normal": "정상"}[self.value]


class InventoryItem(BaseModel):
    """Inventory row as returned by GET /inventory."""
    id: int
    name: str
    category: str
    quantity: int = Field(..., ge=0)
    unit: str
    min_quantity: int = 0
    price: float = 0
    last_updated: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    status: Optional[StockStatus] = None # Only present when the server computes it


class InventoryItemCreate(BaseModel):
    name: str = Field(..., description="Product name.")
    category: str = Field(..., description="Free-form category, e.g. 식품 or 음료.")
    quantity: int = Field(0, ge=0, description="Units currently on hand.")
    unit: str = Field(..., description="Unit of measure, e.g. 개, kg, L.")
    min_quantity: int = Field(0, ge=0, description="Threshold at or below which stock is low.")
    price: float = Field(0, ge=0, description="Unit price in won.")


class InventoryItemUpdate(BaseModel):
    """Partial update; unset fields are not sent."""
    name: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = None
    min_quantity: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)


class InventoryStats(BaseModel):
    total_items: int
    low_stock_count: int
    out_of_stock_count: int
