from fastapi import APIRouter, Depends
from pydantic import BaseModel

from bizup.api.deps import get_dashboard, open_tab, respond
from bizup.schemas.response import SuccessResponse
from bizup.services.dashboard import Dashboard

router = APIRouter()


class ActiveTabRequest(BaseModel):
    tab: str


def _tabs(dashboard: Dashboard) -> dict:
    return {"active": dashboard.navigation.active_tab, "tabs": dashboard.navigation.options()}


@router.get("/tabs", response_model=SuccessResponse)
async def list_tabs(dashboard: Dashboard = Depends(get_dashboard)):
    """Tab bar: every tab and which one is active."""
    return respond(dashboard, _tabs(dashboard))


@router.put("/tabs/active", response_model=SuccessResponse)
async def switch_tab(payload: ActiveTabRequest, dashboard: Dashboard = Depends(get_dashboard)):
    """Activates a tab and returns its freshly loaded view."""
    tab = await open_tab(dashboard, payload.tab)
    return respond(dashboard, {**_tabs(dashboard), "view": tab.view()})
