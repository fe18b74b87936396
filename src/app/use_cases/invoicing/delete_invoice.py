"""DeleteInvoice Use Case

Deletes an invoice and returns its time entries to the unbilled pool.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.time_entry_repository import TimeEntryRepository
from . import errors
from .dtos import DeleteInvoiceResponseDTO

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete invoice

    Business Rules:
    1. Linked entries are released (unbilled, no invoice) before the
       invoice row goes away
    2. Items are deleted with the invoice
    3. Deleting a missing invoice reports INVOICE_NOT_FOUND, so a repeated
       delete never touches entries again
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
        entry_repo: TimeEntryRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo
        self.entry_repo = entry_repo

    async def execute(self, invoice_id: int) -> Result[DeleteInvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_by_id(invoice_id, for_update=True)
            if not invoice:
                await self.uow.rollback()
                return Return.err(errors.invoice_not_found(invoice_id))

            invoice_number = invoice.invoice_number

            released = await self.entry_repo.release(invoice_id)
            await self.item_repo.delete_by_invoice_id(invoice_id)
            await self.invoice_repo.delete(invoice)

            await self.uow.commit()

            logger.info(f"Deleted invoice {invoice_number}, released {released} entries")
            return Return.ok(
                DeleteInvoiceResponseDTO(
                    invoice_id=invoice_id,
                    invoice_number=invoice_number,
                    released_entries=released,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Deleting invoice {invoice_id} failed: {e}")
            return Return.err(errors.persistence_failure("Failed to delete invoice", e))
