"""CreateLinkedInvoice Use Case

Turns selected unbilled time entries into a draft invoice and marks the
entries billed, all in one transaction.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_item_repository import InvoiceItemRepository
from src.app.repositories.invoice_sequence_repository import InvoiceSequenceRepository
from src.app.repositories.invoice_settings_repository import InvoiceSettingsRepository
from src.app.repositories.time_entry_repository import TimeEntryRepository
from src.app.repositories.client_repository import ClientRepository, PhaseRepository
from src.domain.invoice import Invoice, InvoiceStatus, InvoiceType
from src.domain.invoice_item import InvoiceItem
from src.domain.invoice_grouping import group_entries
from src.domain.invoice_numbering import variable_symbol_for
from src.domain.invoice_totals import calculate_totals
from src.domain.time_entry import BillingStatus
from . import errors
from .dtos import CreateLinkedInvoiceCommandDTO, InvoiceDefaults, InvoiceResponseDTO
from .mappers import to_invoice_response
from .terms import resolve_terms, next_invoice_number

logger = logging.getLogger(__name__)


class CreateLinkedInvoice:
    """
    Use Case: Create draft invoice from time entries

    Business Rules:
    1. Entries are re-checked as unbilled at execution time, not trusted
       from the selection screen
    2. All entries must belong to the invoiced client
    3. Invoice number is taken from the locked per-year sequence
    4. Invoice, items and entry claims commit together or not at all
    5. The claim is a conditional update; if fewer rows than selected
       are claimed another invoice got there first and everything rolls back

    Flow:
    1. Load and validate entries (locked)
    2. Group entries into item drafts and compute totals
    3. Resolve due date, tax rate, currency and bank account defaults
    4. Take invoice number, create invoice as draft
    5. Create items in sort order
    6. Claim entries (billing_status=billed, invoice_id=new invoice)
    7. Commit transaction
    8. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        item_repo: InvoiceItemRepository,
        entry_repo: TimeEntryRepository,
        sequence_repo: InvoiceSequenceRepository,
        client_repo: ClientRepository,
        phase_repo: PhaseRepository,
        settings_repo: InvoiceSettingsRepository,
        defaults: Optional[InvoiceDefaults] = None,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.item_repo = item_repo
        self.entry_repo = entry_repo
        self.sequence_repo = sequence_repo
        self.client_repo = client_repo
        self.phase_repo = phase_repo
        self.settings_repo = settings_repo
        self.defaults = defaults or InvoiceDefaults()

    async def execute(self, command: CreateLinkedInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute linked invoice creation

        Args:
            command: CreateLinkedInvoiceCommandDTO with client, entries and terms

        Returns:
            Result[InvoiceResponseDTO]: Draft invoice with items or error

        Errors:
            NO_BILLABLE_ENTRIES: Empty selection or no selected entry is unbilled
            ENTRY_NOT_FOUND: Some entry ID does not exist
            ENTRY_CLIENT_MISMATCH: Some entry belongs to another client
            ENTRY_ALREADY_CLAIMED: Some entry is already on an invoice
            PERSISTENCE_FAILURE: Store failure, nothing was written
        """
        entry_ids = list(dict.fromkeys(command.entry_ids))
        if not entry_ids:
            return Return.err(
                Error(
                    code=errors.NO_BILLABLE_ENTRIES,
                    message="No entries selected for invoicing",
                    reason="entry_ids is empty",
                )
            )

        try:
            # Step 1: Load entries with row locks and validate them
            entries = await self.entry_repo.get_by_ids(entry_ids, for_update=True)

            found_ids = {entry.id for entry in entries}
            missing_ids = [entry_id for entry_id in entry_ids if entry_id not in found_ids]
            if missing_ids:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=errors.ENTRY_NOT_FOUND,
                        message=f"Time entries not found: {missing_ids}",
                        reason="Entries do not exist",
                    )
                )

            foreign_ids = [entry.id for entry in entries if entry.client_id != command.client_id]
            if foreign_ids:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=errors.ENTRY_CLIENT_MISMATCH,
                        message=f"Entries {foreign_ids} do not belong to client {command.client_id}",
                        reason="An invoice covers entries of a single client",
                    )
                )

            claimed_ids = [
                entry.id for entry in entries if entry.billing_status != BillingStatus.UNBILLED
            ]
            if len(claimed_ids) == len(entries):
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=errors.NO_BILLABLE_ENTRIES,
                        message="None of the selected entries is unbilled",
                        reason=f"Already billed entries: {claimed_ids}",
                    )
                )
            if claimed_ids:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=errors.ENTRY_ALREADY_CLAIMED,
                        message=f"Entries {claimed_ids} are already billed on another invoice",
                        reason="Entries changed after they were selected",
                    )
                )

            # Step 2: Group entries into items and compute totals
            phase_names = await self.phase_repo.get_names(entry.phase_id for entry in entries)
            drafts = group_entries(entries, command.group_by, phase_names)

            # Step 3: Resolve defaults from settings
            terms = await resolve_terms(
                self.settings_repo,
                self.defaults,
                user_id=command.user_id,
                issue_date=command.issue_date,
                due_date=command.due_date,
                tax_rate=command.tax_rate,
                bank_account=command.bank_account,
            )
            totals = calculate_totals(drafts, terms.tax_rate)
            client = await self.client_repo.get_by_id(command.client_id)

            # Step 4: Take invoice number and create the draft invoice
            invoice_number = await next_invoice_number(self.sequence_repo, command.issue_date)

            invoice = Invoice(
                user_id=command.user_id,
                client_id=command.client_id,
                client_name=client.name if client else None,
                client_address=client.address if client else None,
                client_ico=client.ico if client else None,
                invoice_number=invoice_number,
                issue_date=command.issue_date,
                due_date=terms.due_date,
                invoice_type=InvoiceType.LINKED,
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

            # Step 5: Create items in sort order
            items = await self.item_repo.create_many(
                [
                    InvoiceItem(
                        invoice_id=created_invoice.id,
                        entry_id=draft.entry_id,
                        phase_id=draft.phase_id,
                        project_id=draft.project_id,
                        description=draft.description,
                        quantity=draft.quantity,
                        unit=draft.unit,
                        unit_price=draft.unit_price,
                        total_price=draft.total_price,
                        sort_order=draft.sort_order,
                    )
                    for draft in drafts
                ]
            )

            # Step 6: Claim entries, only those still unbilled
            claimed = await self.entry_repo.claim_unbilled(entry_ids, created_invoice.id)
            if claimed != len(entry_ids):
                await self.uow.rollback()
                logger.warning(
                    f"Invoice {invoice_number} aborted: claimed {claimed} of "
                    f"{len(entry_ids)} entries, another invoice took the rest"
                )
                return Return.err(
                    Error(
                        code=errors.ENTRY_ALREADY_CLAIMED,
                        message="Some selected entries were billed by a concurrent invoice",
                        reason=f"claimed={claimed}, requested={len(entry_ids)}",
                    )
                )

            # Step 7: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Created linked invoice {invoice_number} for client {command.client_id}: "
                f"{len(entry_ids)} entries, {len(items)} items, total={totals.total_amount}"
            )

            # Step 8: Build response
            return Return.ok(to_invoice_response(created_invoice, items))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Linked invoice creation failed for client {command.client_id}: {e}")
            return Return.err(errors.persistence_failure("Failed to create linked invoice", e))
