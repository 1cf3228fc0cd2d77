from fastapi import APIRouter, Depends, Request

from bizup.api.deps import get_dashboard, open_tab, respond
from bizup.schemas.response import SuccessResponse
from bizup.services.dashboard import Dashboard

router = APIRouter()


@router.get("/menu", response_model=SuccessResponse)
async def menu_view(search: str = "", category: str = "", dashboard: Dashboard = Depends(get_dashboard)):
    tab = await open_tab(dashboard, "menu")
    await tab.set_search(search)
    await tab.set_category(category)
    return respond(dashboard, tab.view())


@router.post("/menu/refresh", response_model=SuccessResponse)
async def refresh_menu(dashboard: Dashboard = Depends(get_dashboard)):
    tab = await open_tab(dashboard, "menu")
    await tab.refresh()
    return respond(dashboard, tab.view())


@router.post("/menu/upload", response_model=SuccessResponse)
async def upload_menu(filename: str, request: Request, dashboard: Dashboard = Depends(get_dashboard)):
    """
    Imports a menu sheet. The raw file is the request body and its name goes in ?filename=,
    e.g. `curl --data-binary @menu.csv '.../menu/upload?filename=menu.csv'`.
    """
    tab = await open_tab(dashboard, "menu")
    content = await request.body()
    ok = tab.select_file((filename, content)) and await tab.upload()
    return respond(dashboard, tab.view(), success=ok)
