from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from imageservice.database import get_db
from imageservice.dependencies import get_event_publisher, get_image_verifier
from imageservice.main import app
from imageservice.models import Base
from imageservice.services.events import EventPublisher
from imageservice.verification import ConnectionSetupError, validate_image_url


class StubVerifier:
    """Verifier double: real URL precondition check, canned verdicts."""

    def __init__(self) -> None:
        self.default = True
        self.verdicts: dict[str, bool] = {}
        self.calls: list[str] = []

    async def verify(self, url: str) -> bool:
        self.calls.append(url)
        ok, reason = validate_image_url(url)
        if not ok:
            raise ConnectionSetupError(url, reason or "invalid URL")
        return self.verdicts.get(url, self.default)


@dataclass
class ApiHarness:
    client: AsyncClient
    session_factory: async_sessionmaker[AsyncSession]
    verifier: StubVerifier
    events: list[str] = field(default_factory=list)


@pytest.fixture
async def api():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    verifier = StubVerifier()
    publisher = EventPublisher()
    published: list[str] = []
    publisher.subscribe(published.append)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_verifier] = lambda: verifier
    app.dependency_overrides[get_event_publisher] = lambda: publisher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield ApiHarness(
            client=client,
            session_factory=session_factory,
            verifier=verifier,
            events=published,
        )

    app.dependency_overrides.clear()
    await engine.dispose()
