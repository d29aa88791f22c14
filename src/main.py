"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import auth, cards, decks, todos
from src.config import Settings, configure_logging, get_settings
from src.exceptions import register_exception_handlers

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(
        f"Starting Flashdeck API ({settings.environment}, "
        f"{'multi-tenant' if settings.auth_enabled else 'single-tenant'})"
    )
    if settings.enabled_social_providers:
        providers = ", ".join(settings.enabled_social_providers)
        logger.info(f"Social sign-in configured for: {providers}")
    yield


app = FastAPI(
    title="Flashdeck API",
    description="Per-user todos and flashcard decks",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Only these origins may receive credentialed cross-origin responses
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth.router)
app.include_router(todos.router)
app.include_router(decks.router)
app.include_router(cards.router)


@app.get("/health")
async def health_check(current_settings: Annotated[Settings, Depends(get_settings)]):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": current_settings.environment,
        "auth_enabled": current_settings.auth_enabled,
    }
