from typing import List

from bizup.core.http_client import ApiClient
from bizup.schemas.order import OrderCreate, OrderRecommendation, OrderResponse


class OrderApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_recommendations(self) -> List[OrderRecommendation]:
        rows = await self.client.get("/orders/recommendations")
        return [OrderRecommendation.model_validate(row) for row in rows]

    async def create(self, data: OrderCreate) -> OrderResponse:
        """Places one order for every line in `data.items`."""
        return OrderResponse.model_validate(await self.client.post("/orders", data.model_dump(mode="json")))
