from bizup.core.http_client import ApiClient
from bizup.schemas.store import NotificationSettings, NotificationSettingsUpdate


class NotificationApi:
    """Store-wide notification toggles, a singleton under /store/notifications."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get(self) -> NotificationSettings:
        return NotificationSettings.model_validate(await self.client.get("/store/notifications"))

    async def update(self, data: NotificationSettingsUpdate) -> NotificationSettings:
        row = await self.client.put("/store/notifications", data.model_dump(mode="json", exclude_none=True))
        return NotificationSettings.model_validate(row)
