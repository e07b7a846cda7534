"""FastAPI application for the translation workbench API."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI

from ..clients.glotpress_client import GlotPressClient
from ..config import config
from ..logging_config import setup_logging
from ..transcription.service import TranscriptionService
from .routes import api, sessions
from .services.session_manager import SessionManager
from .services.translation_store import TranslationStore

logger = logging.getLogger(__name__)


def create_app(
    database_path: Optional[Path] = None,
    glotpress_client: Optional[GlotPressClient] = None,
    transcription_service: Optional[TranscriptionService] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    translation_store = TranslationStore(Path(database_path or config.database_path))
    glotpress = glotpress_client or GlotPressClient()
    transcription = transcription_service or TranscriptionService()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        transcription.initialize()
        yield
        await app.state.session_manager.drain()
        await glotpress.aclose()
        translation_store.close()

    app = FastAPI(
        title="Wappu Lingo",
        description="Crowdsourced WordPress translation workbench API",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store services in app state
    app.state.translation_store = translation_store
    app.state.glotpress_client = glotpress
    app.state.transcription_service = transcription
    app.state.session_manager = SessionManager(
        fetcher=glotpress.fetch_session_strings,
        persister=translation_store.persist,
    )

    # Include routers
    app.include_router(api.router, prefix="/api")
    app.include_router(sessions.router, prefix="/api")

    return app


def main():
    """Entry point for the lingo-web command."""
    import argparse

    parser = argparse.ArgumentParser(description="Run the Wappu Lingo API")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    setup_logging()
    logger.info("Starting Wappu Lingo at http://%s:%s", args.host, args.port)
    uvicorn.run(
        "lingo.web.app:create_app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        factory=True,
    )


if __name__ == "__main__":
    main()
