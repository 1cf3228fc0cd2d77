from enum import Enum
from pydantic import BaseModel
from typing import List, Optional


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def label(self) -> str:
        return {"high": "높음", "medium": "보통", "low": "낮음"}[self.value]


class OrderRecommendation(BaseModel):
    """Server-computed reorder suggestion. Displayed as-is."""
    id: int
    name: str
    current_stock: float
    min_stock: float
    avg_daily: float
    recommended_qty: int
    unit: str
    priority: Priority
    estimated_cost: float
    days_until_out_of_stock: float


class OrderItemCreate(BaseModel):
    """Schema for a single line in the order request."""
    inventory_item_id: int
    quantity: int
    priority: Priority


class OrderCreate(BaseModel):
    items: List[OrderItemCreate]


class OrderLine(BaseModel):
    id: int
    name: str
    quantity: int
    unit: str
    unit_price: float
    total_price: float
    priority: str


class OrderResponse(BaseModel):
    id: int
    status: str
    total_cost: float
    items: List[OrderLine]
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
