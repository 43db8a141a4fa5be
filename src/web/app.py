"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chat import ChatStore
from cli.config_models import ChatbotConfig
from web.deps import get_config
from web.models import HealthResponse
from web.routes import chat

logger = structlog.get_logger()


def create_app(config: ChatbotConfig | None = None) -> FastAPI:
    """Build the app. The store is opened on startup and closed on shutdown."""
    config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = ChatStore(config.database.path).open()
        app.state.store = store
        logger.info("web.startup", db_path=str(store.db_path))
        try:
            yield
        finally:
            store.close()
            logger.info("web.shutdown")

    app = FastAPI(
        title="Pattern Chatbot",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.frontend_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat.router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(status="healthy", timestamp=datetime.now(timezone.utc).isoformat())

    return app
