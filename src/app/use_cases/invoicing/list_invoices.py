"""
List Invoices Use Case

Invoices matching optional filters, newest issue date first.
"""
from typing import List
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus, InvoiceType
from . import errors
from .dtos import InvoiceFiltersDTO, InvoiceResponseDTO
from .mappers import to_invoice_response


class ListInvoices:

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, filters: InvoiceFiltersDTO) -> Result[List[InvoiceResponseDTO]]:
        """
        List invoices without their items

        Args:
            filters: Client, status, type and issue date range filters

        Returns:
            Result[List[InvoiceResponseDTO]]: Matching invoices
        """
        try:
            status = InvoiceStatus(filters.status) if filters.status else None
            invoice_type = InvoiceType(filters.invoice_type) if filters.invoice_type else None
        except ValueError as e:
            return Return.err(
                Error(
                    code=errors.INVALID_STATUS,
                    message="Unknown invoice status or type filter",
                    reason=str(e),
                )
            )

        invoices = await self.invoice_repo.find(
            user_id=filters.user_id,
            client_id=filters.client_id,
            status=status,
            invoice_type=invoice_type,
            date_from=filters.date_from,
            date_to=filters.date_to,
        )
        return Return.ok([to_invoice_response(invoice) for invoice in invoices])
