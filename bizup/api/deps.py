from fastapi import HTTPException, Request, status

from bizup.schemas.response import SuccessResponse
from bizup.services.dashboard import Dashboard


def get_dashboard(request: Request) -> Dashboard:
    dashboard = getattr(request.app.state, "dashboard", None)
    if dashboard is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Dashboard is not ready.")
    return dashboard


async def open_tab(dashboard: Dashboard, tab_id: str):
    try:
        return await dashboard.open(tab_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def respond(dashboard: Dashboard, data, success: bool = True) -> SuccessResponse:
    """Wraps a tab view together with the notices the action produced."""
    return SuccessResponse(success=success, data=data, notices=dashboard.notifier.drain())
