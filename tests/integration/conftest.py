import pytest_asyncio
from datetime import date, time
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.depends import get_session
from src.domain import Client, Phase, TimeEntry


@pytest_asyncio.fixture(scope="function")
async def engine():
    """In-memory SQLite database, fresh schema per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    """Create a new database session for each test"""
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db_session):
    """
    Client with one phase and three unbilled entries

    Entries: 60/90/30 minutes at 1000/h; the first two on 2025-03-03 in
    phase "Vývoj", the third on 2025-03-04 without phase.
    """
    client = Client(user_id="user_123", name="ACME s.r.o.", address="Praha 1", ico="12345678")
    other_client = Client(user_id="user_123", name="Other a.s.")
    db_session.add_all([client, other_client])
    await db_session.flush()

    phase = Phase(client_id=client.id, name="Vývoj")
    db_session.add(phase)
    await db_session.flush()

    entries = [
        TimeEntry(
            user_id="user_123",
            client_id=client.id,
            phase_id=phase.id,
            entry_date=date(2025, 3, 3),
            start_time=time(9, 0),
            end_time=time(10, 0),
            duration_minutes=TimeEntry.minutes_between(time(9, 0), time(10, 0)),
            description="Analýza",
            hourly_rate=Decimal("1000"),
        ),
        TimeEntry(
            user_id="user_123",
            client_id=client.id,
            phase_id=phase.id,
            entry_date=date(2025, 3, 3),
            start_time=time(11, 0),
            end_time=time(12, 30),
            duration_minutes=TimeEntry.minutes_between(time(11, 0), time(12, 30)),
            description="Implementace",
            hourly_rate=Decimal("1000"),
        ),
        TimeEntry(
            user_id="user_123",
            client_id=client.id,
            entry_date=date(2025, 3, 4),
            start_time=time(8, 0),
            end_time=time(8, 30),
            duration_minutes=TimeEntry.minutes_between(time(8, 0), time(8, 30)),
            description="Review",
            hourly_rate=Decimal("1000"),
        ),
    ]
    db_session.add_all(entries)
    await db_session.commit()

    return {"client": client, "other_client": other_client, "phase": phase, "entries": entries}


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
