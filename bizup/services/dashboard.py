from bizup.clients.employees import EmployeeApi
from bizup.clients.inventory import InventoryApi
from bizup.clients.menu import MenuApi
from bizup.clients.notifications import NotificationApi
from bizup.clients.orders import OrderApi
from bizup.clients.out_of_stock import OutOfStockApi
from bizup.clients.store import StoreApi
from bizup.core.config import DEFAULT_TAB
from bizup.core.http_client import ApiClient
from bizup.services.notifier import Notifier
from bizup.tabs.inventory_tab import InventoryTab
from bizup.tabs.menu_tab import MenuTab
from bizup.tabs.navigation import Tab, TabNavigation
from bizup.tabs.order_tab import OrderRecommendationTab
from bizup.tabs.out_of_stock_tab import OutOfStockTab
from bizup.tabs.settings_tab import SettingsTab


class Dashboard:
    """Wires one ApiClient through the resource APIs into the tabs and the navigation shell."""

    def __init__(self, client: ApiClient, default_tab: str = DEFAULT_TAB):
        self.client = client
        self.notifier = Notifier()

        self.inventory = InventoryTab(InventoryApi(client), self.notifier)
        self.menu = MenuTab(MenuApi(client), self.notifier)
        self.order = OrderRecommendationTab(OrderApi(client), self.notifier)
        self.out_of_stock = OutOfStockTab(OutOfStockApi(client), self.notifier)
        self.settings = SettingsTab(EmployeeApi(client), StoreApi(client), NotificationApi(client), self.notifier)

        self.navigation = TabNavigation(
            [self.inventory, self.menu, self.order, self.out_of_stock, self.settings],
            default=default_tab,
        )

    async def open(self, tab_id: str) -> Tab:
        """Makes `tab_id` the active tab (loading it if needed) and returns it."""
        return await self.navigation.select(tab_id)

    async def close(self) -> None:
        await self.navigation.close()
        await self.client.aclose()
