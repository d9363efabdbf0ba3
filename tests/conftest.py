import os

# Settings are read at import time, so these must be set before src is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src import app
from src.db.seed import seed_sample_data


@pytest.fixture
async def session():
    """A session on a fresh in-memory database holding the sample dataset."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        await seed_sample_data(session)
        yield session

    await engine.dispose()


@pytest.fixture
def client():
    # Not used as a context manager, so the lifespan (and the real database) never starts
    yield TestClient(app)
    app.dependency_overrides.clear()
