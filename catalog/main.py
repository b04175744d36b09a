# catalog/main.py
# Responsibility: Application entry point. Configures and launches the FastAPI app.

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from catalog.config.settings import settings
from catalog.routers import admin, auth, search
from catalog.services.inventory_repository import InventoryRepository

VERSION = "1.0.0"


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DB.AUTO_MIGRATE:
        InventoryRepository().ensure_schema()
    yield


def create_app() -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.
    """
    configure_logging()

    app = FastAPI(
        title="Inventory Catalog Search",
        description="Inventory catalog with ranked category search.",
        version=VERSION,
        debug=settings.SERVER.DEBUG,
        lifespan=lifespan
    )

    # Register Routers
    app.include_router(auth.router)
    app.include_router(search.router)
    app.include_router(admin.router)

    # Health Check
    @app.get("/health", tags=["System"])
    def health_check():
        return {"status": "ok", "version": VERSION}

    return app

# Application instance
app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "catalog.main:app",
        host=settings.SERVER.HOST,
        port=settings.SERVER.PORT,
        reload=settings.SERVER.DEBUG
    )
