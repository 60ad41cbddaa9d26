import os

# Settings are read at import time; point them at an in-memory SQLite store.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest

from catalog.storage.database import build_engine, build_session_factory
from catalog.v1_0.models import Base
from catalog.v1_0.repositories import UserRepository


@pytest.fixture()
async def engine():
    engine = build_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture()
async def session(engine):
    factory = build_session_factory(engine)
    async with factory() as db:
        yield db


@pytest.fixture()
def repo():
    return UserRepository()
