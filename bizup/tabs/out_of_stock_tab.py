import logging
import math
from typing import List, Optional

from bizup.clients.out_of_stock import OutOfStockApi
from bizup.core.config import RESTOCK_QUANTITY
from bizup.schemas.out_of_stock import OutOfStockItem
from bizup.services.data_loader import DataLoader
from bizup.services.notifier import Notifier

log = logging.getLogger("bizup.tabs.out_of_stock")


class OutOfStockTab:
    tab_id = "outofstock"
    label = "품절 관리"

    def __init__(self, api: OutOfStockApi, notifier: Notifier, restock_quantity: int = RESTOCK_QUANTITY):
        self.api = api
        self.notifier = notifier
        self.restock_quantity = restock_quantity
        self.restocking: Optional[int] = None
        self.loader: Optional[DataLoader[List[OutOfStockItem]]] = None

    async def activate(self) -> None:
        # Close loaders left over from an earlier activation
        await self.deactivate()
        self.loader = DataLoader(self.api.get_all, on_error=self._on_error, name="out-of-stock")
        await self.loader.start()

    async def deactivate(self) -> None:
        if self.loader is not None:
            await self.loader.close()

    def _on_error(self, error: Exception) -> None:
        log.error(f"Error loading out-of-stock items: {error}")
        self.notifier.error("품절 상품을 불러오지 못했어요. 잠시 후 다시 시도해 주세요.")

    @property
    def loading(self) -> bool:
        return bool(self.loader and self.loader.loading)

    @property
    def items(self) -> List[OutOfStockItem]:
        return (self.loader and self.loader.data) or []

    def summary(self) -> dict:
        items = self.items
        average_days = 0
        if items:
            # Half-up rounding, not banker's
            average_days = math.floor(sum(i.days_out_of_stock for i in items) / len(items) + 0.5)
        return {
            "count": len(items),
            "average_days_out_of_stock": average_days,
            "total_estimated_loss": sum(i.estimated_loss for i in items),
        }

    def view(self) -> dict:
        return {
            "loading": self.loading,
            "restocking": self.restocking,
            "summary": self.summary(),
            "items": [{**i.model_dump(), "status_label": i.status.label} for i in self.items],
        }

    async def restock(self, item_id: int) -> bool:
        try:
            self.restocking = item_id
            await self.api.restock(item_id, self.restock_quantity)
        except Exception as e:
            log.error(f"Error restocking item {item_id}: {e}")
            self.notifier.error("재입고를 진행하지 못했어요. 잠시 후 다시 시도해 주세요.")
            return False
        finally:
            self.restocking = None

        self.notifier.success("재입고를 완료했어요.")
        # The restocked item drops off the list
        if self.loader is not None:
            await self.loader.refresh()
        return True
