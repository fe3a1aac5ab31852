"""Test configuration and fixtures."""

import os

os.environ.setdefault("APP_ENV", "development")
os.environ.setdefault("DB_TYPE", "sqlite")
os.environ.setdefault("JWT_ACCESS_SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio

from fred.core.db import Base, build_engine, build_sessionmaker
from fred.models import User, PurchaseOrder, Rental, RentalPO


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'fred.db'}", "sqlite")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield build_sessionmaker(engine)

    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def seed(session_factory):
    """
    Persist rows through a separate session and return them detached.

    Service calls roll back the test session on rejection, which would
    expire anything living in it.
    """
    async def _seed(*objs):
        async with session_factory() as session:
            session.add_all(objs)
            await session.commit()
        return objs[0] if len(objs) == 1 else objs

    return _seed


@pytest_asyncio.fixture
async def rc_user(seed):
    return await seed(User(username="rc.user@txdot.gov", role="rc"))


@pytest_asyncio.fixture
async def es_user(seed):
    return await seed(User(username="es.user@txdot.gov", role="es"))


@pytest.fixture
def make_po(seed):
    async def _make_po(**fields):
        fields.setdefault("status", "Draft")
        return await seed(PurchaseOrder(**fields))

    return _make_po


@pytest.fixture
def make_rental(seed):
    async def _make_rental(status="Submitted", po_id=None):
        rental = await seed(Rental(status=status, equipment_description="Skid steer"))
        if po_id is not None:
            await seed(RentalPO(rental_id=rental.rental_id, po_id=po_id))
        return rental

    return _make_rental
