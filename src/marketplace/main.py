import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from tortoise import Tortoise

from .core.config import TORTOISE_ORM_CONFIG
from .core.errors import exception_handlers
from .core.logging_config import configure_logging
from .features.auth.router import router as auth_router
from .features.catalog.router import categories_router, products_router
from .features.comments.router import router as comments_router
from .features.orders.router import router as orders_router
from .features.regions.router import router as regions_router
from .features.uploads.router import router as uploads_router
from .features.users.router import router as users_router

configure_logging()

logger = logging.getLogger("marketplace.main")  # This logger will inherit from 'marketplace'


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Connects Tortoise-ORM on startup and closes its connections on shutdown.
    """
    logger.info("Starting application...")
    await Tortoise.init(config=TORTOISE_ORM_CONFIG)
    logger.info("Tortoise-ORM has been initialized.")

    yield

    await Tortoise.close_connections()
    logger.info("Tortoise-ORM connections have been closed.")


app = FastAPI(
    title="Marketplace API",
    description="API for a regional marketplace: users, catalog, comments and orders.",
    version="0.1.0",
    exception_handlers=exception_handlers(),
    lifespan=lifespan,
)


@app.get("/")
async def read_root(request: Request):
    """
    Root endpoint for the API.
    """
    client_host = request.client.host if request.client else "unknown client"
    logger.info(f"Root endpoint '/' accessed by {client_host}")
    return {"message": "Welcome to the Marketplace API!"}


app.include_router(regions_router)
app.include_router(auth_router)
app.include_router(categories_router)
app.include_router(products_router)
app.include_router(orders_router)
app.include_router(comments_router)
app.include_router(users_router)
app.include_router(uploads_router)
