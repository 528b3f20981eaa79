import os

# Cheap hashing for tests; must be set before config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENABLE_LOGGING_MIDDLEWARE", "0")

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from src.depends import get_notifier, get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.notifier import INotifier


class RecordingNotifier(INotifier):
    """Captures notifications instead of queueing email"""

    def __init__(self):
        self.welcomed = []
        self.resets = []

    def send_welcome(self, user):
        self.welcomed.append(user.email)

    def send_password_reset(self, user, token, expires_at):
        self.resets.append({"email": user.email, "token": token, "expires_at": expires_at})

    def last_reset_token(self) -> str:
        return self.resets[-1]["token"]


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
def notifier():
    return RecordingNotifier()


@pytest_asyncio.fixture
async def app(db_session, notifier):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_notifier] = lambda: notifier

    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    from httpx import ASGITransport

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
