import os

# Must be set before the app modules build their engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENV"] = "test"

import pytest

from notification_feed.db.init_db import create_tables, drop_tables
from notification_feed.db.session import SessionLocal


@pytest.fixture(autouse=True)
def schema():
    create_tables()
    yield
    drop_tables()


@pytest.fixture
def db(schema):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
