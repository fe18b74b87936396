"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from datetime import date
from src.domain.invoice import Invoice, InvoiceStatus, InvoiceType


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Provides access to invoice data for billing operations.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, invoice_id: int, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def find(
        self,
        user_id: Optional[str] = None,
        client_id: Optional[int] = None,
        status: Optional[InvoiceStatus] = None,
        invoice_type: Optional[InvoiceType] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[Invoice]:
        """
        Retrieve invoices matching all given filters

        Ordered by issue_date, then created_at, newest first.
        Date bounds apply to issue_date and are inclusive.
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        pass
