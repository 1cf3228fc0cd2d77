from typing import List

from bizup.core.http_client import ApiClient
from bizup.schemas.out_of_stock import OutOfStockItem, RestockResponse


class OutOfStockApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self) -> List[OutOfStockItem]:
        rows = await self.client.get("/out-of-stock")
        return [OutOfStockItem.model_validate(row) for row in rows]

    async def restock(self, item_id: int, quantity: int) -> RestockResponse:
        # quantity travels in the query string, the body stays empty
        row = await self.client.post(f"/out-of-stock/{item_id}/restock", params={"quantity": quantity})
        return RestockResponse.model_validate(row)
