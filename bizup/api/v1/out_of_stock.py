from fastapi import APIRouter, Depends

from bizup.api.deps import get_dashboard, open_tab, respond
from bizup.schemas.response import SuccessResponse
from bizup.services.dashboard import Dashboard

router = APIRouter()


@router.get("/out-of-stock", response_model=SuccessResponse)
async def out_of_stock_view(dashboard: Dashboard = Depends(get_dashboard)):
    tab = await open_tab(dashboard, "outofstock")
    return respond(dashboard, tab.view())


@router.post("/out-of-stock/{item_id}/restock", response_model=SuccessResponse)
async def restock_item(item_id: int, dashboard: Dashboard = Depends(get_dashboard)):
    """Adds the configured restock quantity back onto one item."""
    tab = await open_tab(dashboard, "outofstock")
    ok = await tab.restock(item_id)
    return respond(dashboard, tab.view(), success=ok)
