import logging
from dataclasses import dataclass
from typing import List, Optional

from pydantic import ValidationError

from bizup.clients.inventory import InventoryApi
from bizup.schemas.inventory import InventoryItem, InventoryItemCreate, InventoryItemUpdate, InventoryStats, StockStatus
from bizup.services.data_loader import DataLoader
from bizup.services.notifier import Notifier
from bizup.services.views import category_options, count_stats, filter_items, inventory_status
from bizup.tabs.dialogs import FormDialog, missing_fields

log = logging.getLogger("bizup.tabs.inventory")

REQUIRED_FIELDS = ("name", "category", "unit")


@dataclass
class InventoryForm:
    name: str = ""
    category: str = ""
    quantity: int = 0
    unit: str = ""
    min_quantity: int = 0
    price: float = 0


class InventoryTab:
    tab_id = "inventory"
    label = "재고 관리"

    def __init__(self, api: InventoryApi, notifier: Notifier):
        self.api = api
        self.notifier = notifier

        self.search_query = ""
        self.selected_category = ""
        self.add_dialog: FormDialog[InventoryForm] = FormDialog(InventoryForm)
        self.edit_dialog: FormDialog[InventoryForm] = FormDialog(InventoryForm)
        self.editing_item_id: Optional[int] = None

        self.items_loader: Optional[DataLoader[List[InventoryItem]]] = None
        self.stats_loader: Optional[DataLoader[InventoryStats]] = None

    # --- lifecycle ---

    async def activate(self) -> None:
        # Close loaders left over from an earlier activation
        await self.deactivate()
        self.items_loader = DataLoader(self._fetch_items, on_error=self._on_items_error, name="inventory")
        self.stats_loader = DataLoader(self.api.get_stats, on_error=self._on_stats_error, name="inventory-stats")
        await self.items_loader.start()
        await self.stats_loader.start()

    async def deactivate(self) -> None:
        for loader in (self.items_loader, self.stats_loader):
            if loader is not None:
                await loader.close()

    async def reload(self) -> None:
        # List and stats are independent requests; stats may lag the list briefly
        if self.items_loader is not None:
            await self.items_loader.refresh()
        if self.stats_loader is not None:
            await self.stats_loader.refresh()

    async def _fetch_items(self) -> List[InventoryItem]:
        return await self.api.get_all(self.search_query or None)

    def _on_items_error(self, error: Exception) -> None:
        log.error(f"Error loading inventory: {error}")
        self.notifier.error("재고 목록 로딩 오류가 발생했습니다.")

    def _on_stats_error(self, error: Exception) -> None:
        log.error(f"Error loading inventory stats: {error}")

    # --- derived state ---

    @property
    def loading(self) -> bool:
        return bool(self.items_loader and self.items_loader.loading)

    @property
    def inventory(self) -> List[InventoryItem]:
        return (self.items_loader and self.items_loader.data) or []

    @property
    def filtered(self) -> List[InventoryItem]:
        return filter_items(self.inventory, self.search_query, self.selected_category)

    @property
    def stats(self) -> InventoryStats:
        """Server stats when available, otherwise counts from the loaded list."""
        if self.stats_loader is not None and self.stats_loader.data is not None:
            return self.stats_loader.data
        return count_stats(self.inventory)

    def status_of(self, item: InventoryItem) -> StockStatus:
        return inventory_status(item)

    def view(self) -> dict:
        return {
            "search": self.search_query,
            "category": self.selected_category,
            "loading": self.loading,
            "stats": self.stats.model_dump(),
            "categories": [option.model_dump() for option in category_options(self.inventory)],
            "items": [
                {**item.model_dump(), "status": self.status_of(item).value, "status_label": self.status_of(item).label}
                for item in self.filtered
            ],
            "add_dialog_open": self.add_dialog.open,
            "edit_dialog_open": self.edit_dialog.open,
        }

    # --- input ---

    async def set_search(self, query: str) -> None:
        """Search text narrows the server query too, so changing it reloads."""
        if query == self.search_query:
            return
        self.search_query = query
        await self.reload()

    def set_category(self, category: str) -> None:
        self.selected_category = category or ""

    # --- actions ---

    async def add_item(self) -> bool:
        form = self.add_dialog.values
        if missing_fields(form, REQUIRED_FIELDS):
            self.notifier.error("재고 추가 필수 정보가 누락되었습니다.")
            return False
        try:
            payload = InventoryItemCreate(**vars(form))
        except ValidationError as e:
            log.error(f"Invalid inventory form: {e}")
            self.notifier.error("재고 추가 입력값이 올바르지 않습니다.")
            return False

        try:
            self.add_dialog.busy = True
            await self.api.create(payload)
        except Exception as e:
            log.error(f"Error adding inventory item: {e}")
            self.notifier.error("재고 추가 오류가 발생했습니다.")
            return False
        finally:
            self.add_dialog.busy = False

        self.notifier.success("재고 추가 성공")
        self.add_dialog.close()
        await self.reload()
        return True

    def open_edit(self, item: InventoryItem) -> None:
        self.editing_item_id = item.id
        self.edit_dialog.show(InventoryForm(
            name=item.name,
            category=item.category,
            quantity=item.quantity,
            unit=item.unit,
            min_quantity=item.min_quantity,
            price=item.price,
        ))

    async def update_item(self) -> bool:
        if self.editing_item_id is None:
            return False
        form = self.edit_dialog.values
        if missing_fields(form, REQUIRED_FIELDS):
            self.notifier.error("재고 수정 필수 정보가 누락되었습니다.")
            return False
        try:
            payload = InventoryItemUpdate(**vars(form))
        except ValidationError as e:
            log.error(f"Invalid inventory form: {e}")
            self.notifier.error("재고 수정 입력값이 올바르지 않습니다.")
            return False

        try:
            self.edit_dialog.busy = True
            await self.api.update(self.editing_item_id, payload)
        except Exception as e:
            # Dialog stays open with the entered values so the user can retry
            log.error(f"Error updating inventory item {self.editing_item_id}: {e}")
            self.notifier.error("재고 수정 중 오류가 발생했습니다.")
            return False
        finally:
            self.edit_dialog.busy = False

        self.notifier.success("재고 정보가 수정되었습니다.")
        self.edit_dialog.close()
        self.editing_item_id = None
        await self.reload()
        return True

    async def delete_item(self, item_id: int, confirm: bool = False) -> bool:
        if not confirm:
            return False
        try:
            await self.api.delete(item_id)
        except Exception as e:
            log.error(f"Error deleting inventory item {item_id}: {e}")
            self.notifier.error("재고 항목 삭제 중 오류가 발생했습니다.")
            return False

        self.notifier.success("재고 항목이 삭제되었습니다.")
        await self.reload()
        return True
