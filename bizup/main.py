import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, status
from bizup.api.v1.inventory import router as inventory_router
from bizup.api.v1.menu import router as menu_router
from bizup.api.v1.navigation import router as navigation_router
from bizup.api.v1.orders import router as orders_router
from bizup.api.v1.out_of_stock import router as out_of_stock_router
from bizup.api.v1.settings import router as settings_router
from bizup.core.config import API_BASE_URL, LOG_FORMAT, LOG_LEVEL, PROJECT_NAME, VERSION
from bizup.core.exception_handlers import setup_exception_handlers
from bizup.core.http_client import ApiClient
from bizup.services.dashboard import Dashboard

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
log = logging.getLogger("bizup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Builds the dashboard session on startup and tears it down on shutdown."""
    log.info(f"Starting {PROJECT_NAME} v{VERSION} against {API_BASE_URL}...")
    # A pre-built client (e.g. one with a mock transport) takes precedence
    client = getattr(app.state, "api_client", None) or ApiClient(API_BASE_URL)
    app.state.dashboard = Dashboard(client)
    try:
        yield
    finally:
        await app.state.dashboard.close()
        app.state.dashboard = None
        log.info(f"{PROJECT_NAME} stopped.")


app = FastAPI(
    title=PROJECT_NAME,
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc"
)

# One router per tab, all under the dashboard prefix
for router, tag in (
    (navigation_router, "Navigation"),
    (inventory_router, "Inventory"),
    (menu_router, "Menu"),
    (orders_router, "Order Recommendations"),
    (out_of_stock_router, "Out of Stock"),
    (settings_router, "Settings"),
):
    app.include_router(router, prefix="/api/v1/dashboard", tags=[tag])


setup_exception_handlers(app)

@app.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Simple health check endpoint."""
    return {"status": "ok", "app_name": PROJECT_NAME}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("bizup.main:app", host="0.0.0.0", port=8080)
