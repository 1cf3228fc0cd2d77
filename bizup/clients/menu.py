from typing import List, Optional

from bizup.core.http_client import ApiClient, FileInput
from bizup.schemas.menu import MenuItem, MenuUploadResponse


class MenuApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self, search: Optional[str] = None, category: Optional[str] = None) -> List[MenuItem]:
        # Empty filters are left out of the query entirely
        params = {"search": search or None, "category": category or None}
        rows = await self.client.get("/menus", params)
        return [MenuItem.model_validate(row) for row in rows]

    async def upload_csv(self, file: FileInput) -> MenuUploadResponse:
        """Imports a .csv/.xlsx/.xls menu sheet. Extension checks happen in the menu tab."""
        return MenuUploadResponse.model_validate(await self.client.post_file("/menus/upload", file))
