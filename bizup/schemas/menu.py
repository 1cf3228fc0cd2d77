from enum import Enum
from typing import List, Optional
from pydantic import BaseModel


class MenuStockStatus(str, Enum):
    SUFFICIENT = "sufficient"
    LOW = "low"
    OUT_OF_STOCK = "out_of_stock"

    @property
    def label(self) -> str:
        return {"sufficient": "충분", "low": "부족", "out_of_stock": "품절"}[self.value]


class MenuItem(BaseModel):
    id: int
    name: str
    category: str
    quantity: int
    min_quantity: int
    unit: str
    price: float
    status: MenuStockStatus # Computed by the server
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class MenuUploadResponse(BaseModel):
    """Result of a CSV/Excel menu import."""
    success: bool
    message: str
    items_created: int = 0
    items_updated: int = 0
    errors: Optional[List[str]] = None
