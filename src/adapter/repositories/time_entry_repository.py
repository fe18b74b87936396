"""SQLAlchemy implementation of TimeEntryRepository

Billing transitions are issued as single conditional UPDATE statements so
the affected row count reveals entries changed by concurrent transactions.
"""

from typing import List, Optional, Sequence
from datetime import datetime
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.time_entry_repository import TimeEntryRepository
from src.domain.time_entry import TimeEntry, BillingStatus


class SqlAlchemyTimeEntryRepository(TimeEntryRepository):
    """
    SQLAlchemy implementation of TimeEntryRepository

    Features:
    - Optional pessimistic locking on reads (SELECT FOR UPDATE)
    - Conditional set-based billing updates with row counts
    - In-session entries kept in sync with the updates
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_ids(self, entry_ids: Sequence[int], for_update: bool = False) -> List[TimeEntry]:
        """
        Retrieve entries by ID

        Args:
            entry_ids: Entry IDs
            for_update: If True, locks the rows with SELECT FOR UPDATE

        Returns:
            Entries found, in the order of entry_ids
        """
        if not entry_ids:
            return []

        stmt = select(TimeEntry).where(TimeEntry.id.in_(list(entry_ids)))

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        by_id = {entry.id: entry for entry in result.scalars().all()}
        return [by_id[entry_id] for entry_id in dict.fromkeys(entry_ids) if entry_id in by_id]

    async def get_unbilled(
        self, client_id: Optional[int] = None, user_id: Optional[str] = None
    ) -> List[TimeEntry]:
        stmt = select(TimeEntry).where(TimeEntry.billing_status == BillingStatus.UNBILLED)

        if client_id:
            stmt = stmt.where(TimeEntry.client_id == client_id)
        if user_id:
            stmt = stmt.where(TimeEntry.user_id == user_id)

        stmt = stmt.order_by(TimeEntry.entry_date.desc(), TimeEntry.start_time.desc())

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def claim_unbilled(self, entry_ids: Sequence[int], invoice_id: int) -> int:
        """
        Mark entries billed on an invoice, only where still unbilled

        Args:
            entry_ids: Entries to claim
            invoice_id: Invoice that claims them

        Returns:
            Number of entries actually claimed
        """
        stmt = (
            update(TimeEntry)
            .where(TimeEntry.id.in_(list(entry_ids)))
            .where(TimeEntry.billing_status == BillingStatus.UNBILLED)
            .values(
                billing_status=BillingStatus.BILLED,
                invoice_id=invoice_id,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def mark_paid(self, invoice_id: int) -> int:
        stmt = (
            update(TimeEntry)
            .where(TimeEntry.invoice_id == invoice_id)
            .values(billing_status=BillingStatus.PAID, updated_at=datetime.utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def release(self, invoice_id: int) -> int:
        stmt = (
            update(TimeEntry)
            .where(TimeEntry.invoice_id == invoice_id)
            .values(
                billing_status=BillingStatus.UNBILLED,
                invoice_id=None,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session="evaluate")
        )
        result = await self.session.execute(stmt)
        return result.rowcount
