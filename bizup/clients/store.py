from bizup.core.http_client import ApiClient
from bizup.schemas.store import Store, StoreUpdate


class StoreApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get(self) -> Store:
        return Store.model_validate(await self.client.get("/store"))

    async def update(self, data: StoreUpdate) -> Store:
        return Store.model_validate(await self.client.put("/store", data.model_dump(mode="json", exclude_none=True)))
