import logging
from typing import List, Optional

from bizup.clients.orders import OrderApi
from bizup.schemas.order import OrderCreate, OrderItemCreate, OrderRecommendation, Priority
from bizup.services.data_loader import DataLoader
from bizup.services.notifier import Notifier
from bizup.services.selection import Selection

log = logging.getLogger("bizup.tabs.order")


class OrderRecommendationTab:
    tab_id = "order"
    label = "발주 추천"

    def __init__(self, api: OrderApi, notifier: Notifier):
        self.api = api
        self.notifier = notifier
        self.selection = Selection()
        self.ordering = False
        self.loader: Optional[DataLoader[List[OrderRecommendation]]] = None

    async def activate(self) -> None:
        # Close loaders left over from an earlier activation
        await self.deactivate()
        self.loader = DataLoader(self.api.get_recommendations, on_error=self._on_error, name="recommendations")
        await self.loader.start()

    async def deactivate(self) -> None:
        if self.loader is not None:
            await self.loader.close()

    def _on_error(self, error: Exception) -> None:
        log.error(f"Error loading order recommendations: {error}")
        self.notifier.error("발주 추천 목록 로딩 오류가 발생했습니다.")

    @property
    def loading(self) -> bool:
        return bool(self.loader and self.loader.loading)

    @property
    def recommendations(self) -> List[OrderRecommendation]:
        return (self.loader and self.loader.data) or []

    @property
    def total_cost(self) -> float:
        return self.selection.total(self.recommendations, "estimated_cost")

    def toggle(self, item_id: int) -> bool:
        return self.selection.toggle(item_id)

    def summary(self) -> dict:
        recs = self.recommendations
        return {
            "high_count": sum(1 for r in recs if r.priority == Priority.HIGH),
            "medium_count": sum(1 for r in recs if r.priority == Priority.MEDIUM),
            "selected_count": len(self.selection),
            "total_cost": self.total_cost,
        }

    def view(self) -> dict:
        return {
            "loading": self.loading,
            "ordering": self.ordering,
            "summary": self.summary(),
            "items": [
                {**r.model_dump(), "priority_label": r.priority.label, "selected": r.id in self.selection}
                for r in self.recommendations
            ],
        }

    async def order_selected(self) -> bool:
        """Places one order for everything selected. On failure the selection is kept for a retry."""
        picked = self.selection.pick(self.recommendations)
        if not picked:
            return False

        order = OrderCreate(items=[
            OrderItemCreate(inventory_item_id=r.id, quantity=r.recommended_qty, priority=r.priority)
            for r in picked
        ])
        try:
            self.ordering = True
            await self.api.create(order)
        except Exception as e:
            log.error(f"Error placing order: {e}")
            self.notifier.error("발주 오류가 발생했습니다.")
            return False
        finally:
            self.ordering = False

        self.notifier.success(f"{len(picked)}개의 상품을 발주했습니다.")
        self.selection.clear()
        if self.loader is not None:
            await self.loader.refresh()
        return True
