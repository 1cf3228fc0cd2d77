# bizup/schemas/__init__.py
from .inventory import InventoryItem, InventoryItemCreate, InventoryItemUpdate, InventoryStats, StockStatus
from .menu import MenuItem, MenuStockStatus, MenuUploadResponse
from .order import OrderCreate, OrderItemCreate, OrderLine, OrderRecommendation, OrderResponse, Priority
from .out_of_stock import OutOfStockItem, OutOfStockStatus, RestockResponse
from .employee import Employee, EmployeeCreate, EmployeeStatus, EmployeeUpdate
from .store import NOTIFICATION_KEYS, NotificationSettings, NotificationSettingsUpdate, Store, StoreUpdate
from .response import Notice, SuccessResponse

# Export all schemas
__all__ = [
    "InventoryItem",
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "InventoryStats",
    "StockStatus",
    "MenuItem",
    "MenuStockStatus",
    "MenuUploadResponse",
    "OrderCreate",
    "OrderItemCreate",
    "OrderLine",
    "OrderRecommendation",
    "OrderResponse",
    "Priority",
    "OutOfStockItem",
    "OutOfStockStatus",
    "RestockResponse",
    "Employee",
    "EmployeeCreate",
    "EmployeeStatus",
    "EmployeeUpdate",
    "NOTIFICATION_KEYS",
    "NotificationSettings",
    "NotificationSettingsUpdate",
    "Store",
    "StoreUpdate",
    "Notice",
    "SuccessResponse",
]
