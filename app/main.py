# app/main.py
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings, get_settings
from app.core.errors import HelpdeskError, register_error_handlers
from app.core.logging_config import configure_logging
from app.core.store import TicketStore, create_store
from app.ticket.routes import router as ticket_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, store: TicketStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store = store or create_store(settings.STORE_URL, settings.STORE_KEY)
        logger.info("Using %s for key %r", app.state.store.backend, settings.STORE_KEY)
        try:
            app.state.store.ping()
            logger.info("Connected to store")
        except HelpdeskError as exc:
            # requests keep failing with 500 until the store comes back
            logger.error("Store client error: %s", exc.message)
        yield
        app.state.store.close()
        logger.info("Store connection closed")

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESC,
        version=settings.APP_VERSION,
        docs_url="/api-docs",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    # Routers
    app.include_router(ticket_router)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok"}

    if settings.STATIC_DIR and Path(settings.STATIC_DIR).is_dir():
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

    return app


app = create_app()
