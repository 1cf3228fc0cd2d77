from fastapi import APIRouter, Depends

from bizup.api.deps import get_dashboard, open_tab, respond
from bizup.schemas.response import SuccessResponse
from bizup.services.dashboard import Dashboard

router = APIRouter()


@router.get("/orders/recommendations", response_model=SuccessResponse)
async def recommendations_view(dashboard: Dashboard = Depends(get_dashboard)):
    """Recommendations with the current selection, priority counts and estimated total."""
    tab = await open_tab(dashboard, "order")
    return respond(dashboard, tab.view())


@router.post("/orders/recommendations/{item_id}/toggle", response_model=SuccessResponse)
async def toggle_recommendation(item_id: int, dashboard: Dashboard = Depends(get_dashboard)):
    tab = await open_tab(dashboard, "order")
    tab.toggle(item_id)
    return respond(dashboard, tab.view())


@router.post("/orders", response_model=SuccessResponse)
async def order_selected(dashboard: Dashboard = Depends(get_dashboard)):
    """Places a single order for every selected recommendation."""
    tab = await open_tab(dashboard, "order")
    ok = await tab.order_selected()
    return respond(dashboard, tab.view(), success=ok)
