from enum import Enum
from pydantic import BaseModel

from bizup.schemas.inventory import InventoryItem


class OutOfStockStatus(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    RECENT = "recent"

    @property
    def label(self) -> str:
        return {"critical": "급한", "warning": "중요", "recent": "최근"}[self.value]


class OutOfStockItem(BaseModel):
    id: int
    name: str
    category: str
    days_out_of_stock: int
    last_stock: int
    unit: str
    estimated_loss: float
    status: OutOfStockStatus


class RestockResponse(BaseModel):
    message: str
    item: InventoryItem
