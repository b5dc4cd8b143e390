"""
Contacts API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.contacts import router as contacts_router
from api.errors import register_error_handlers
from api.middleware import register_middleware
from auth.routes import router as auth_router
from config.settings import config
from database.session import connect_db

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("sqlalchemy.engine", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Verify the database before serving; exit the process if it is unreachable."""
    logger.info("Connecting to database…")
    try:
        await connect_db()
    except Exception as exc:
        logger.error("Database connection error: %s", exc)
        sys.exit(1)
    logger.info("Application ready to accept requests.")
    yield
    logger.info("Shutting down.")


def create_app() -> FastAPI:
    app = FastAPI(
        lifespan=lifespan,
        title="Contacts API",
        version="1.0.0",
        description="Contacts CRUD with token-based user authentication.",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_error_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api")
    app.include_router(contacts_router, prefix="/api/contacts")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
