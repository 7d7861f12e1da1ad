"""Shared fixtures: in-memory database, API client, fake email service and factories."""

from datetime import datetime, timedelta
from typing import Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import b2bee.models  # noqa: F401  registers the tables
from b2bee.core.security import create_admin_token
from b2bee.database import get_session
from b2bee.main import app
from b2bee.models.bee import Bee
from b2bee.models.lead import Lead, LeadStatus
from b2bee.services.email_service import EmailService, get_email_service


class RecordingEmailService(EmailService):
    """Keeps every email instead of sending it; can be told to fail or raise."""

    def __init__(self):
        self.sent: list = []
        self.fail = False
        self.error: Optional[Exception] = None
        self.fail_for: set = set()

    async def send_email(self, to, subject, body, html=None) -> bool:
        if self.error is not None:
            raise self.error
        if self.fail or to in self.fail_for:
            return False
        self.sent.append({"to": to, "subject": subject, "body": body, "html": html})
        return True


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def email_service():
    return RecordingEmailService()


@pytest_asyncio.fixture
async def client(session_factory, email_service):
    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_email_service] = lambda: email_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_admin_token('admin@test.local')}"}


@pytest.fixture
def make_bee(session):
    async def _make_bee(slug="sales-bee", name="Sales Bee", **kwargs) -> Bee:
        bee = Bee(slug=slug, name=name, **kwargs)
        session.add(bee)
        await session.commit()
        await session.refresh(bee)
        return bee

    return _make_bee


@pytest.fixture
def make_lead(session):
    async def _make_lead(
        email="jo@x.com",
        first_name="Jo",
        last_name="Lee",
        age_minutes: float = 0,
        **kwargs
    ) -> Lead:
        kwargs.setdefault("status", LeadStatus.NEW)
        lead = Lead(
            email=email,
            first_name=first_name,
            last_name=last_name,
            created_at=datetime.utcnow() - timedelta(minutes=age_minutes),
            **kwargs
        )
        session.add(lead)
        await session.commit()
        await session.refresh(lead)
        return lead

    return _make_lead
