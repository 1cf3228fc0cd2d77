from typing import List, Optional

from bizup.core.http_client import ApiClient
from bizup.schemas.inventory import InventoryItem, InventoryItemCreate, InventoryItemUpdate, InventoryStats


class InventoryApi:
    """Typed calls for /inventory."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self, search: Optional[str] = None) -> List[InventoryItem]:
        # The server expects the search parameter even when it is empty
        rows = await self.client.get("/inventory", {"search": search or ""})
        return [InventoryItem.model_validate(row) for row in rows]

    async def get_stats(self) -> InventoryStats:
        return InventoryStats.model_validate(await self.client.get("/inventory/stats"))

    async def get_by_id(self, item_id: int) -> InventoryItem:
        return InventoryItem.model_validate(await self.client.get(f"/inventory/{item_id}"))

    async def create(self, data: InventoryItemCreate) -> InventoryItem:
        row = await self.client.post("/inventory", data.model_dump(mode="json"))
        return InventoryItem.model_validate(row)

    async def update(self, item_id: int, data: InventoryItemUpdate) -> InventoryItem:
        row = await self.client.put(f"/inventory/{item_id}", data.model_dump(mode="json", exclude_none=True))
        return InventoryItem.model_validate(row)

    async def delete(self, item_id: int) -> None:
        await self.client.delete(f"/inventory/{item_id}")
