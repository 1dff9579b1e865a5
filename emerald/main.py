"""
Floor Service — FastAPI entrypoint
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from emerald.core.config import get_settings
from emerald.engine.floor import FloorEngine
from emerald.models.catalog import load_catalog
from emerald.tasks.sync import sync_from_settings
from emerald.api import health, kitchen, manager, orders, tables

settings = get_settings()
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: catalog is loaded once and never changes afterwards
    catalog = load_catalog(settings.MENU_FILE or None)
    app.state.engine = FloorEngine.from_settings(catalog, settings)
    app.state.sync = sync_from_settings()
    logger.info("%s %s ready with %d tables", settings.SERVICE_NAME, settings.SERVICE_VERSION, len(catalog.tables))
    yield
    # Shutdown
    await app.state.sync.close()


app = FastAPI(
    title="Emerald Floor Service",
    description="Walk-in seating, waiting queue, kitchen status and billing for one restaurant.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url=None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.METRICS_ENABLED:
    Instrumentator().instrument(app).expose(app, endpoint="/metrics")

app.include_router(orders.router)
app.include_router(tables.router)
app.include_router(kitchen.router)
app.include_router(manager.router)
app.include_router(health.router)


@app.get("/")
async def root():
    return {"service": settings.SERVICE_NAME, "version": settings.SERVICE_VERSION}


def run() -> None:
    import uvicorn

    uvicorn.run("emerald.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
