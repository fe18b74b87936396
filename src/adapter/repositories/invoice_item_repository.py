"""SQLAlchemy Invoice Item Repository Implementation

Implements invoice item persistence using SQLAlchemy async session.
"""

from typing import List
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.domain.invoice_item import InvoiceItem


class SqlAlchemyInvoiceItemRepository(InvoiceItemRepository):
    """
    SQLAlchemy implementation of InvoiceItemRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_many(self, items: List[InvoiceItem]) -> List[InvoiceItem]:
        self.session.add_all(items)
        await self.session.flush()
        for item in items:
            await self.session.refresh(item)
        return items

    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceItem]:
        """
        Retrieve all items of an invoice ordered by sort_order

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceItem
        """
        statement = (
            select(InvoiceItem)
            .where(InvoiceItem.invoice_id == invoice_id)
            .order_by(InvoiceItem.sort_order)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def delete_by_invoice_id(self, invoice_id: int) -> int:
        # Explicit because SQLite does not enforce ON DELETE CASCADE by default
        statement = (
            delete(InvoiceItem)
            .where(InvoiceItem.invoice_id == invoice_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(statement)
        return result.rowcount
