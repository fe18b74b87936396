"""UpdateInvoiceStatus Use Case

Moves an invoice along its lifecycle. Paying an invoice also marks its
time entries paid.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.time_entry_repository import TimeEntryRepository
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_lifecycle import can_transition
from . import errors
from .dtos import UpdateInvoiceStatusCommandDTO, InvoiceResponseDTO
from .mappers import to_invoice_response

logger = logging.getLogger(__name__)


class UpdateInvoiceStatus:
    """
    Use Case: Change invoice status

    Business Rules:
    1. Only transitions in the lifecycle table are accepted
       (draft -> issued -> sent -> paid, issued -> paid, overdue -> paid)
    2. Transition to paid sets paid_at and cascades billing_status=paid
       to every linked time entry
    3. Status and entry updates commit together

    Flow:
    1. Load invoice (locked)
    2. Validate transition
    3. Update status (and paid_at)
    4. Cascade paid status to entries
    5. Commit transaction
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

    async def execute(self, command: UpdateInvoiceStatusCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute status update

        Args:
            command: UpdateInvoiceStatusCommandDTO with invoice_id and target status

        Returns:
            Result[InvoiceResponseDTO]: Updated invoice or error

        Errors:
            INVALID_STATUS: Target is not a known status
            INVOICE_NOT_FOUND: Invoice does not exist
            INVALID_TRANSITION: Target not reachable from the current status
        """
        try:
            target = InvoiceStatus(command.status)
        except ValueError:
            return Return.err(
                Error(
                    code=errors.INVALID_STATUS,
                    message=f"Unknown invoice status: {command.status}",
                )
            )

        try:
            # Step 1: Load invoice with lock
            invoice = await self.invoice_repo.get_by_id(command.invoice_id, for_update=True)
            if not invoice:
                await self.uow.rollback()
                return Return.err(errors.invoice_not_found(command.invoice_id))

            # Step 2: Validate transition
            current = InvoiceStatus(invoice.status)
            if not can_transition(current, target):
                error = Error(
                    code=errors.INVALID_TRANSITION,
                    message=f"Cannot change invoice {invoice.invoice_number} "
                            f"from {current.value} to {target.value}",
                    reason="Transition not allowed by invoice lifecycle",
                )
                await self.uow.rollback()
                return Return.err(error)

            # Step 3: Update status
            invoice.status = target
            if target == InvoiceStatus.PAID:
                invoice.paid_at = datetime.utcnow()
            updated_invoice = await self.invoice_repo.update(invoice)

            # Step 4: Cascade paid status to entries
            paid_entries = 0
            if target == InvoiceStatus.PAID:
                paid_entries = await self.entry_repo.mark_paid(updated_invoice.id)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Invoice {updated_invoice.invoice_number} {current.value} -> {target.value}"
                + (f", {paid_entries} entries marked paid" if target == InvoiceStatus.PAID else "")
            )

            items = await self.item_repo.get_by_invoice_id(updated_invoice.id)
            return Return.ok(to_invoice_response(updated_invoice, items))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Status update of invoice {command.invoice_id} failed: {e}")
            return Return.err(errors.persistence_failure("Failed to update invoice status", e))
