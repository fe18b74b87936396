"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

from typing import Optional, List
from datetime import date, datetime
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import Invoice, InvoiceStatus, InvoiceType


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID with optional row-level locking

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.id == invoice_id)

        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def find(
        self,
        user_id: Optional[str] = None,
        client_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        invoice_type: Optional[InvoiceType] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[Invoice]:
        statement = select(Invoice)

        if user_id:
            statement = statement.where(Invoice.user_id == user_id)
        if client_id:
            statement = statement.where(Invoice.client_id == client_id)
        if status:
            statement = statement.where(Invoice.status == status)
        if invoice_type:
            statement = statement.where(Invoice.invoice_type == invoice_type)
        if date_from:
            statement = statement.where(Invoice.issue_date >= date_from)
        if date_to:
            statement = statement.where(Invoice.issue_date <= date_to)

        statement = statement.order_by(Invoice.issue_date.desc(), Invoice.created_at.desc())

        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        invoice.updated_at = datetime.utcnow()
        self.session.add(invoice)
        await self.session.flush()
        await self.session.refresh(invoice)
        return invoice

    async def delete(self, invoice: Invoice) -> None:
        await self.session.delete(invoice)
        await self.session.flush()
