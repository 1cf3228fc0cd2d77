from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from bizup.api.deps import get_dashboard, open_tab, respond
from bizup.schemas.response import SuccessResponse
from bizup.services.dashboard import Dashboard
from bizup.tabs.inventory_tab import InventoryForm

router = APIRouter()


class InventoryFormRequest(BaseModel):
    """What the add/edit dialog submits. Blank required fields are caught by the tab."""
    name: str = ""
    category: str = ""
    quantity: int = 0
    unit: str = ""
    min_quantity: int = 0
    price: float = 0


@router.get("/inventory", response_model=SuccessResponse)
async def inventory_view(search: str = "", category: str = "", dashboard: Dashboard = Depends(get_dashboard)):
    """Inventory list filtered by search text and category, with stats and category options."""
    tab = await open_tab(dashboard, "inventory")
    await tab.set_search(search)
    tab.set_category(category)
    return respond(dashboard, tab.view())


@router.post("/inventory", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def add_inventory_item(payload: InventoryFormRequest, response: Response, dashboard: Dashboard = Depends(get_dashboard)):
    tab = await open_tab(dashboard, "inventory")
    tab.add_dialog.show(InventoryForm(**payload.model_dump()))
    ok = await tab.add_item()
    if not ok:
        response.status_code = status.HTTP_200_OK
    return respond(dashboard, tab.view(), success=ok)


@router.put("/inventory/{item_id}", response_model=SuccessResponse)
async def update_inventory_item(item_id: int, payload: InventoryFormRequest, dashboard: Dashboard = Depends(get_dashboard)):
    tab = await open_tab(dashboard, "inventory")
    item = next((i for i in tab.inventory if i.id == item_id), None)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Inventory item {item_id} not found.")

    tab.open_edit(item)
    tab.edit_dialog.edit(**payload.model_dump(exclude_unset=True))
    ok = await tab.update_item()
    return respond(dashboard, tab.view(), success=ok)


@router.delete("/inventory/{item_id}", response_model=SuccessResponse)
async def delete_inventory_item(item_id: int, confirm: bool = False, dashboard: Dashboard = Depends(get_dashboard)):
    """Deletion only goes through with ?confirm=true."""
    tab = await open_tab(dashboard, "inventory")
    ok = await tab.delete_item(item_id, confirm=confirm)
    return respond(dashboard, tab.view(), success=ok)
