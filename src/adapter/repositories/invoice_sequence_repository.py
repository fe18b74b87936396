"""SQLAlchemy implementation of InvoiceSequenceRepository

Serializes invoice numbering on a per-year counter row (SELECT FOR UPDATE).
"""

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_sequence_repository import InvoiceSequenceRepository
from src.domain.invoice import Invoice
from src.domain.invoice_sequence import InvoiceSequence


class SqlAlchemyInvoiceSequenceRepository(InvoiceSequenceRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def next_value(self, year: int) -> int:
        """
        Take the next invoice sequence number for a year

        A missing counter row is seeded from the highest number already
        issued for that year.

        Args:
            year: Calendar year of issue

        Returns:
            Sequence number
        """
        stmt = (
            select(InvoiceSequence)
            .where(InvoiceSequence.year == year)
            .with_for_update()
        )
        result = await self.session.execute(stmt)
        sequence = result.scalar_one_or_none()

        if sequence is None:
            sequence = InvoiceSequence(year=year, last_value=await self._highest_issued(year))

        sequence.last_value += 1
        self.session.add(sequence)
        await self.session.flush()
        return sequence.last_value

    async def _highest_issued(self, year: int) -> int:
        stmt = select(Invoice.invoice_number).where(Invoice.invoice_number.like(f"{year}-%"))
        result = await self.session.execute(stmt)
        sequences = [
            int(number.rsplit("-", 1)[-1])
            for number in result.scalars().all()
            if number.rsplit("-", 1)[-1].isdigit()
        ]
        return max(sequences, default=0)
