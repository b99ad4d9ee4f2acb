"""Pokebin API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PokebinError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and lookup tables initialized on startup via lifespan; a missing
      or unreadable lookup table aborts startup

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static frontend mounted AFTER API routes so API paths take precedence
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from pokebin.api.error_handlers import register_error_handlers
from pokebin.api.routes import health, pastes
from pokebin.config import get_settings
from pokebin.core.paste_grammar import PasteGrammar
from pokebin.core.set_builder import SetBuilder
from pokebin.infrastructure.database import close_db, init_db
from pokebin.infrastructure.lookup_tables import load_lookup_bundle
from pokebin.infrastructure.observability import add_access_logging, setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    lookups = load_lookup_bundle(
        settings.species_table_path,
        settings.moves_table_path,
        settings.items_table_path,
        placeholder=settings.image_placeholder,
        storage_dir=settings.image_storage_dir,
        public_dir=settings.image_public_dir,
    )
    app.state.image_resolver = lookups.images
    app.state.set_builder = SetBuilder(
        PasteGrammar(), lookups.species, lookups.moves, lookups.items, lookups.images,
    )
    logger.info("Pokebin API started")
    yield
    logger.info("Pokebin API shutting down")
    await close_db()


app = FastAPI(title="Pokebin API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
add_access_logging(app)
register_error_handlers(app)

app.include_router(health.router)
app.include_router(pastes.router)

if os.path.isdir(settings.static_dir):
    app.mount(
        "/", StaticFiles(directory=settings.static_dir, html=True), name="static",
    )
