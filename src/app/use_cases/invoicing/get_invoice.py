"""Get Invoice Use Case

Retrieves an invoice with its items.
"""

from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from . import errors
from .dtos import InvoiceResponseDTO
from .mappers import to_invoice_response


class GetInvoice:
    """
    Get Invoice Use Case

    Read-only. Items are returned in sort order.
    """

    def __init__(self, invoice_repo: InvoiceRepository, item_repo: InvoiceItemRepository):
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo

    async def execute(self, invoice_id: int) -> Result[InvoiceResponseDTO]:
        """
        Execute get invoice operation

        Args:
            invoice_id: Invoice ID

        Returns:
            Result[InvoiceResponseDTO]: Invoice with items or error

        Errors:
            INVOICE_NOT_FOUND: Invoice does not exist
        """
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            return Return.err(errors.invoice_not_found(invoice_id))

        items = await self.item_repo.get_by_invoice_id(invoice_id)
        return Return.ok(to_invoice_response(invoice, items))
