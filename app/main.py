# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from app.api.errors import register_exception_handlers
from app.api.routers import auth, carts, health, products, users
from app.data.database import init_db
from app.data.seed import seed
from app.utils.settings import SEED_PRODUCTS
from app.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database")
    try:
        init_db()
        if SEED_PRODUCTS:
            seed()
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        raise
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Store Cart Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Include routers
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(products.router)
    app.include_router(carts.router)

    register_exception_handlers(app)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
