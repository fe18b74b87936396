"""Time Entry Repository Interface

Read access to time entries and the billing-field writes used by invoicing.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from src.domain.time_entry import TimeEntry


class TimeEntryRepository(ABC):
    """
    Repository interface for TimeEntry persistence

    Billing writes are set-based conditional updates so the caller can
    detect entries changed by a concurrent transaction.
    """

    @abstractmethod
    async def get_by_ids(self, entry_ids: Sequence[int], for_update: bool = False) -> List[TimeEntry]:
        """
        Retrieve entries by ID

        Args:
            entry_ids: Entry IDs
            for_update: If True, locks the rows with SELECT FOR UPDATE

        Returns:
            Entries found, in the order of entry_ids; unknown IDs are skipped
        """
        pass

    @abstractmethod
    async def get_unbilled(
        self, client_id: Optional[int] = None, user_id: Optional[str] = None
    ) -> List[TimeEntry]:
        """
        Retrieve unbilled entries

        Args:
            client_id: Optional filter by client
            user_id: Optional filter by owner

        Returns:
            Entries ordered by date, then start time, newest first
        """
        pass

    @abstractmethod
    async def claim_unbilled(self, entry_ids: Sequence[int], invoice_id: int) -> int:
        """
        Mark entries billed on an invoice, only where still unbilled

        Equivalent to:
            UPDATE time_entries SET billing_status='billed', invoice_id=:invoice_id
            WHERE id IN (:entry_ids) AND billing_status='unbilled'

        Args:
            entry_ids: Entries to claim
            invoice_id: Invoice that claims them

        Returns:
            Number of entries claimed; less than len(entry_ids) means some
            entry was claimed by someone else
        """
        pass

    @abstractmethod
    async def mark_paid(self, invoice_id: int) -> int:
        """Set billing_status='paid' on every entry of the invoice, returns the count"""
        pass

    @abstractmethod
    async def release(self, invoice_id: int) -> int:
        """Reset every entry of the invoice to unbilled with no invoice, returns the count"""
        pass
