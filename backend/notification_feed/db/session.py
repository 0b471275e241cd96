import importlib.util
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from notification_feed.core.config import settings

logger = logging.getLogger(__name__)

# DATABASE_URL must be set. Postgres in deployment; sqlite is accepted for local test runs.
if not settings.database_url:
    raise RuntimeError("DATABASE_URL environment variable must be set")


def _normalize_url(url: str) -> str:
    """Point plain postgres URLs at the psycopg (v3) driver when psycopg2 is absent.

    Only 'psycopg' v3 is a dependency (psycopg[binary]); SQLAlchemy would otherwise
    try to load psycopg2 for a bare 'postgresql://' URL.
    """
    psycopg2_present = importlib.util.find_spec("psycopg2") is not None
    if psycopg2_present or not url.startswith(("postgres://", "postgresql://")) or "+psycopg" in url:
        return url
    # Normalize legacy prefix 'postgres://' -> 'postgresql://'
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url.replace("postgresql://", "postgresql+psycopg://", 1)


def _make_engine(url: str) -> Engine:
    url = _normalize_url(url)
    if url.startswith("sqlite"):
        # In-memory sqlite must share one connection across threads (TestClient runs the app in a worker thread)
        return create_engine(url, connect_args={"check_same_thread": False}, poolclass=StaticPool)
    return create_engine(url, pool_pre_ping=True)


SQLALCHEMY_DATABASE_URL = _normalize_url(settings.database_url)

engine = _make_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Feed reads favor the secondary when one is configured
if settings.database_replica_url:
    read_engine = _make_engine(settings.database_replica_url)
    logger.info("[db] feed reads routed to replica")
else:
    read_engine = engine
ReadSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=read_engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_read_db():
    db = ReadSessionLocal()
    try:
        yield db
    finally:
        db.close()
