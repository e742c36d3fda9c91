# storefront/api/__init__.py
from contextlib import asynccontextmanager

from fastapi import FastAPI

from storefront.api.routers import carts, orders, users, health
from storefront.data.database import Base, engine
from storefront.utils.settings import SEED_ON_STARTUP
from storefront.utils.logging import get_logger

# rejestracja wszystkich modeli w Base.metadata przed create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)

    if SEED_ON_STARTUP:
        from storefront.data.seed import seed
        seed()

    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Storefront Cart/Order Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(carts.router)
    app.include_router(orders.router)

    return app
