import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from dashboard.api.auth import router as auth_router
from dashboard.api.customers import router as customers_router
from dashboard.api.invoices import router as invoices_router
from dashboard.config import configure_logging, get_settings
from dashboard.db.engine import init_db

logger = logging.getLogger(__name__)


def create_app(create_schema: bool = True) -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if create_schema:
            init_db()
        logger.info("Dashboard started")
        yield

    app = FastAPI(
        title="Invoices Dashboard",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(auth_router)
    app.include_router(customers_router)
    app.include_router(invoices_router)
    return app


app = create_app()
