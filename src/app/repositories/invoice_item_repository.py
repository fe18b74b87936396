"""Invoice Item Repository Interface

Defines the contract for invoice item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice_item import InvoiceItem


class InvoiceItemRepository(ABC):
    """
    Repository interface for InvoiceItem persistence

    Items are written once together with their invoice and removed with it.
    """

    @abstractmethod
    async def create_many(self, items: List[InvoiceItem]) -> List[InvoiceItem]:
        """
        Persist items of one invoice

        Args:
            items: InvoiceItem entities in sort order

        Returns:
            Created items with generated IDs
        """
        pass

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[InvoiceItem]:
        """
        Retrieve all items of an invoice ordered by sort_order

        Args:
            invoice_id: Invoice ID

        Returns:
            List of InvoiceItem
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: int) -> int:
        """Delete all items of an invoice, returns the number removed"""
        pass
