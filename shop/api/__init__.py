# shop/api/__init__.py
from datetime import datetime, timezone

from fastapi import FastAPI, Request

from shop.api.errors import register_exception_handlers
from shop.api.routers import categories, health, orders, products, users
from shop.utils.logging import get_logger

logger = get_logger("shop.http")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Shop Service",
        version="1.0.0",
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path} at {datetime.now(timezone.utc).isoformat()}")
        return await call_next(request)

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(categories.router)
    app.include_router(products.router)
    app.include_router(orders.router)

    return app
