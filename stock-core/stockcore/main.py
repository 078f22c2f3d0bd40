from contextlib import asynccontextmanager
from fastapi import FastAPI

from stockcore.api.errors import setup_exception_handlers
from stockcore.api.v1.routes_catalog import router as catalog_router
from stockcore.api.v1.routes_collections import router as collections_router
from stockcore.api.v1.routes_dashboard import router as dashboard_router
from stockcore.api.v1.routes_inventory import router as inventory_router
from stockcore.api.v1.routes_procurements import router as procurements_router
from stockcore.api.v1.routes_sales import router as sales_router
from stockcore.core.config import settings
from stockcore.core.logging_config import configure_logging
from stockcore.db.base import engine
from stockcore.db.orm_registry import create_all_tables, import_all_orm_models

import_all_orm_models()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_all_tables(engine)
    yield
    await engine.dispose()


app = FastAPI(title="Stock Core API", lifespan=lifespan)

setup_exception_handlers(app)

app.include_router(catalog_router)
app.include_router(inventory_router)
app.include_router(sales_router)
app.include_router(procurements_router)
app.include_router(collections_router)
app.include_router(dashboard_router)

@app.get("/health")
async def health():
    return {"status": "ok"}
