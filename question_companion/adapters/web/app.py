"""
FastAPI application factory for the Question Companion JSON API.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from question_companion.config.settings import get_config
from .routes import close_all_sessions, router


@asynccontextmanager
async def _lifespan(app: FastAPI):
    yield
    # No reset timer may fire after the loop that owns it is gone
    close_all_sessions()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title=get_config().web.title, docs_url="/docs", lifespan=_lifespan)
    app.include_router(router)
    return app
