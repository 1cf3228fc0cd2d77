from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from bizup.api.deps import get_dashboard, open_tab, respond
from bizup.schemas.response import SuccessResponse
from bizup.services.dashboard import Dashboard
from bizup.tabs.settings_tab import EmployeeForm, StoreForm

router = APIRouter()


class EmployeeFormRequest(BaseModel):
    name: str = ""
    role: str = ""
    phone: str = ""


class StoreFormRequest(BaseModel):
    name: str = ""
    address: str = ""
    phone: str = ""


class ToggleRequest(BaseModel):
    enabled: bool


@router.get("/settings", response_model=SuccessResponse)
async def settings_view(dashboard: Dashboard = Depends(get_dashboard)):
    tab = await open_tab(dashboard, "settings")
    return respond(dashboard, tab.view())


@router.post("/settings/employees", response_model=SuccessResponse, status_code=status.HTTP_201_CREATED)
async def add_employee(payload: EmployeeFormRequest, response: Response, dashboard: Dashboard = Depends(get_dashboard)):
    tab = await open_tab(dashboard, "settings")
    tab.add_dialog.show(EmployeeForm(**payload.model_dump()))
    ok = await tab.add_employee()
    if not ok:
        response.status_code = status.HTTP_200_OK
    return respond(dashboard, tab.view(), success=ok)


@router.put("/settings/employees/{employee_id}", response_model=SuccessResponse)
async def update_employee(employee_id: int, payload: EmployeeFormRequest, dashboard: Dashboard = Depends(get_dashboard)):
    tab = await open_tab(dashboard, "settings")
    employee = next((e for e in tab.employees if e.id == employee_id), None)
    if employee is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Employee {employee_id} not found.")

    tab.open_edit(employee)
    tab.edit_dialog.edit(**payload.model_dump(exclude_unset=True))
    ok = await tab.update_employee()
    return respond(dashboard, tab.view(), success=ok)


@router.delete("/settings/employees/{employee_id}", response_model=SuccessResponse)
async def delete_employee(employee_id: int, confirm: bool = False, dashboard: Dashboard = Depends(get_dashboard)):
    tab = await open_tab(dashboard, "settings")
    ok = await tab.delete_employee(employee_id, confirm=confirm)
    return respond(dashboard, tab.view(), success=ok)


@router.put("/settings/store", response_model=SuccessResponse)
async def save_store(payload: StoreFormRequest, dashboard: Dashboard = Depends(get_dashboard)):
    tab = await open_tab(dashboard, "settings")
    tab.store_form = StoreForm(**payload.model_dump())
    ok = await tab.save_store()
    return respond(dashboard, tab.view(), success=ok)


@router.put("/settings/notifications/{key}", response_model=SuccessResponse)
async def set_notification(key: str, payload: ToggleRequest, dashboard: Dashboard = Depends(get_dashboard)):
    """Unknown keys surface as 400 through the ValidationFailed handler."""
    tab = await open_tab(dashboard, "settings")
    ok = await tab.set_notification(key, payload.enabled)
    return respond(dashboard, tab.view(), success=ok)
