"""CreateStandaloneInvoice Use Case

Creates a draft invoice from hand-entered items. No time entry is touched.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_sequence_repository import InvoiceSequenceRepository
from src.app.repositories.invoice_settings_repository import InvoiceSettingsRepository
from src.app.repositories.client_repository import ClientRepository
from src.domain.invoice import Invoice, InvoiceStatus, InvoiceType
from src.domain.invoice_item import InvoiceItem
from src.domain.invoice_numbering import variable_symbol_for
from src.domain.invoice_totals import calculate_totals, line_total
from . import errors
from .dtos import CreateStandaloneInvoiceCommandDTO, InvoiceDefaults, InvoiceResponseDTO
from .mappers import to_invoice_response
from .terms import resolve_terms, next_invoice_number

logger = logging.getLogger(__name__)


class CreateStandaloneInvoice:
    """
    Use Case: Create draft invoice with free-form items

    Business Rules:
    1. Items are stored verbatim in request order
    2. Client snapshot comes from the client record when client_id is
       given, otherwise from the free-text fields
    3. Numbering, totals and defaults work as for linked invoices
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
        sequence_repo: InvoiceSequenceRepository,
        client_repo: ClientRepository,
        settings_repo: InvoiceSettingsRepository,
        defaults: Optional[InvoiceDefaults] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo
        self.sequence_repo = sequence_repo
        self.client_repo = client_repo
        self.settings_repo = settings_repo
        self.defaults = defaults or InvoiceDefaults()

    async def execute(self, command: CreateStandaloneInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        try:
            client_name = command.client_name
            client_address = command.client_address
            client_ico = command.client_ico

            if command.client_id is not None:
                client = await self.client_repo.get_by_id(command.client_id)
                if not client:
                    return Return.err(
                        Error(
                            code=errors.CLIENT_NOT_FOUND,
                            message=f"Client with ID {command.client_id} not found",
                        )
                    )
                client_name = client_name or client.name
                client_address = client_address or client.address
                client_ico = client_ico or client.ico

            terms = await resolve_terms(
                self.settings_repo,
                self.defaults,
                user_id=command.user_id,
                issue_date=command.issue_date,
                due_date=command.due_date,
                tax_rate=command.tax_rate,
                bank_account=command.bank_account,
            )
            totals = calculate_totals(command.items, terms.tax_rate)

            invoice_number = await next_invoice_number(self.sequence_repo, command.issue_date)

            invoice = Invoice(
                user_id=command.user_id,
                client_id=command.client_id,
                client_name=client_name,
                client_address=client_address,
                client_ico=client_ico,
                invoice_number=invoice_number,
                issue_date=command.issue_date,
                due_date=terms.due_date,
                invoice_type=InvoiceType.STANDALONE,
                status=InvoiceStatus.DRAFT,
                subtotal=totals.subtotal,
                tax_rate=totals.tax_rate,
                tax_amount=totals.tax_amount,
                total_amount=totals.total_amount,
                currency=terms.currency,
                variable_symbol=command.variable_symbol or variable_symbol_for(invoice_number),
                bank_account=terms.bank_account,
                notes=command.notes,
            )
            created_invoice = await self.invoice_repo.create(invoice)

            items = await self.item_repo.create_many(
                [
                    InvoiceItem(
                        invoice_id=created_invoice.id,
                        description=item.description,
                        quantity=item.quantity,
                        unit=item.unit,
                        unit_price=item.unit_price,
                        total_price=line_total(item.quantity, item.unit_price),
                        sort_order=position,
                    )
                    for position, item in enumerate(command.items)
                ]
            )

            await self.uow.commit()

            logger.info(
                f"Created standalone invoice {invoice_number}: "
                f"{len(items)} items, total={totals.total_amount}"
            )
            return Return.ok(to_invoice_response(created_invoice, items))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Standalone invoice creation failed: {e}")
            return Return.err(errors.persistence_failure("Failed to create standalone invoice", e))
