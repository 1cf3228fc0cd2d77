from typing import Iterable, List, Optional, Sequence, TypeVar

from pydantic import BaseModel

from bizup.schemas.inventory import InventoryItem, InventoryStats, StockStatus

T = TypeVar("T")

DEFAULT_SEARCH_FIELDS = ("name", "category")


class CategoryOption(BaseModel):
    value: str
    label: str


ALL_CATEGORIES = CategoryOption(value="", label="전체 카테고리")


def matches_query(item: object, query: str, fields: Sequence[str] = DEFAULT_SEARCH_FIELDS) -> bool:
    """Case-insensitive substring match against any of `fields`. An empty query matches everything."""
    if not query:
        return True
    needle = query.lower()
    return any(needle in str(getattr(item, field, "") or "").lower() for field in fields)


def filter_items(
    items: Iterable[T],
    query: str = "",
    category: Optional[str] = "",
    fields: Sequence[str] = DEFAULT_SEARCH_FIELDS,
) -> List[T]:
    """
    Derived view over an already-loaded list: free-text search AND exact category.
    Never touches the source list; always returns a new one.
    """
    return [
        item for item in items
        if matches_query(item, query, fields) and (not category or getattr(item, "category", None) == category)
    ]


def category_options(items: Iterable[object]) -> List[CategoryOption]:
    """Distinct categories present in `items`, sorted, behind an 'all categories' entry."""
    categories = sorted({getattr(item, "category") for item in items})
    return [ALL_CATEGORIES] + [CategoryOption(value=c, label=c) for c in categories]


def stock_status(quantity: int, min_quantity: int) -> StockStatus:
    if quantity == 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= min_quantity:
        return StockStatus.LOW
    return StockStatus.NORMAL


def inventory_status(item: InventoryItem) -> StockStatus:
    # The server's value wins; derive only when it was left out
    return item.status or stock_status(item.quantity, item.min_quantity)


def count_stats(items: Sequence[InventoryItem]) -> InventoryStats:
    """Stats computed from the loaded list, used until /inventory/stats answers."""
    statuses = [inventory_status(item) for item in items]
    return InventoryStats(
        total_items=len(items),
        low_stock_count=statuses.count(StockStatus.LOW),
        out_of_stock_count=statuses.count(StockStatus.OUT_OF_STOCK),
    )
