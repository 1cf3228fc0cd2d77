from typing import Optional
from pydantic import BaseModel


class Store(BaseModel):
    """The single store this deployment manages."""
    id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class StoreUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None


NOTIFICATION_KEYS = ("low_stock", "out_of_stock", "order_reminder", "daily_report")


class NotificationSettings(BaseModel):
    id: int
    low_stock: bool = True
    out_of_stock: bool = True
    order_reminder: bool = True
    daily_report: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class NotificationSettingsUpdate(BaseModel):
    low_stock: Optional[bool] = None
    out_of_stock: Optional[bool] = None
    order_reminder: Optional[bool] = None
    daily_report: Optional[bool] = None
