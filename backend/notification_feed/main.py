import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notification_feed.api.router import api_router
from notification_feed.core.config import settings
from notification_feed.core.logging import configure_logging
from notification_feed.db.init_db import create_tables, seed_demo_data

logger = logging.getLogger(__name__)

def _run_migrations_if_needed():
    """Apply Alembic migrations automatically in production if enabled.

    Controlled by AUTO_APPLY_MIGRATIONS (default: on). Safe to run repeatedly.
    """
    if settings.env.lower() != "prod" or not settings.auto_apply_migrations:
        return
    from alembic import command
    from alembic.config import Config

    alembic_ini = Path(__file__).resolve().parents[1] / "alembic.ini"
    if not alembic_ini.exists():
        logger.warning("[migrate] alembic.ini not found at %s, skipping auto-migrations", alembic_ini)
        return
    cfg = Config(str(alembic_ini))
    # Ensure script_location resolves correctly when launched from arbitrary CWD
    script_location = Path(__file__).resolve().parents[1] / "alembic"
    if script_location.exists():
        cfg.set_main_option("script_location", str(script_location))
    logger.info("[migrate] Applying Alembic migrations -> head ...")
    try:
        command.upgrade(cfg, "head")
    except Exception:
        # Do not kill the app on migration failure; can be retried manually.
        logger.exception("[migrate] Migration failed")
        return
    logger.info("[migrate] Migrations applied successfully")

@asynccontextmanager
async def lifespan(_app: FastAPI):
    _run_migrations_if_needed()
    if settings.is_dev:
        create_tables()
        seed_demo_data()
    yield

configure_logging()

app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)

# Configurable CORS origins (CORS_ORIGINS env). If empty -> dev defaults.
origins = settings.cors_origins
logger.info("[startup] Resolved CORS origins: %s", origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)

def run():
    """Serve the API with uvicorn on HOST:PORT (reload in dev)."""
    uvicorn.run("notification_feed.main:app", host=settings.host, port=settings.port, reload=settings.is_dev)

if __name__ == "__main__":
    run()
