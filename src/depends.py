from decimal import Decimal
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoicing.dtos import InvoiceDefaults

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_invoice_defaults() -> InvoiceDefaults:
    return InvoiceDefaults(
        due_days=ApplicationConfig.DEFAULT_DUE_DAYS,
        tax_rate=Decimal(str(ApplicationConfig.DEFAULT_TAX_RATE)),
        currency=ApplicationConfig.DEFAULT_CURRENCY,
        bank_account=ApplicationConfig.DEFAULT_BANK_ACCOUNT,
    )


async def create_tables():
    """Create missing tables; schema changes are not migrated"""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
