"""Invoice API Routes

FastAPI routes for invoice creation, lifecycle and deletion.
"""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.invoice_request import (
    CreateLinkedInvoiceRequestSchema,
    CreateStandaloneInvoiceRequestSchema,
    UpdateInvoiceStatusRequestSchema,
)
from src.app.use_cases.invoicing import (
    CreateLinkedInvoice,
    CreateStandaloneInvoice,
    UpdateInvoiceStatus,
    DeleteInvoice,
    GetInvoiceStats,
    ListInvoices,
    GetInvoice,
    GetPaymentInfo,
    InvoiceDefaults,
    CreateLinkedInvoiceCommandDTO,
    CreateStandaloneInvoiceCommandDTO,
    StandaloneItemDTO,
    UpdateInvoiceStatusCommandDTO,
    InvoiceFiltersDTO,
    InvoiceResponseDTO,
    InvoiceStatsDTO,
    PaymentInfoDTO,
)
from src.adapter.repositories import (
    SqlAlchemyInvoiceRepository,
    SqlAlchemyInvoiceItemRepository,
    SqlAlchemyInvoiceSequenceRepository,
    SqlAlchemyInvoiceSettingsRepository,
    SqlAlchemyTimeEntryRepository,
    SqlAlchemyClientRepository,
    SqlAlchemyPhaseRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_invoice_defaults
from src.api.error import ClientError

router = APIRouter(prefix="/billing/invoices", tags=["Invoices"])

_ERROR_EXAMPLE = {
    "application/json": {
        "example": {"error": {"code": "INVALID_TRANSITION", "message": "Cannot change invoice 2025-0001 from draft to paid"}}
    }
}


@router.post(
    "/linked",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "Entry not found"},
        409: {"description": "Entry already billed on another invoice"},
        422: {"description": "No billable entries or entries of another client"},
    },
)
async def create_linked_invoice(
    request: CreateLinkedInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session),
    defaults: InvoiceDefaults = Depends(get_invoice_defaults),
):
    """
    Create a draft invoice from unbilled time entries.

    Entries are grouped into items by `group_by` (`entry`, `phase` or `day`)
    and marked billed on the new invoice in the same transaction.

    **Returns:**
    - 201: Invoice created
    - 404: Some entry does not exist
    - 409: Some entry is already billed
    - 422: Nothing billable in the selection, or entries of another client
    """
    use_case = CreateLinkedInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        item_repo=SqlAlchemyInvoiceItemRepository(session),
        entry_repo=SqlAlchemyTimeEntryRepository(session),
        sequence_repo=SqlAlchemyInvoiceSequenceRepository(session),
        client_repo=SqlAlchemyClientRepository(session),
        phase_repo=SqlAlchemyPhaseRepository(session),
        settings_repo=SqlAlchemyInvoiceSettingsRepository(session),
        defaults=defaults,
    )
    result = await use_case.execute(CreateLinkedInvoiceCommandDTO(**request.model_dump()))

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.post(
    "/standalone",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Client not found"}},
)
async def create_standalone_invoice(
    request: CreateStandaloneInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session),
    defaults: InvoiceDefaults = Depends(get_invoice_defaults),
):
    """
    Create a draft invoice with hand-entered items.

    **Returns:**
    - 201: Invoice created
    - 404: client_id given but client does not exist
    """
    use_case = CreateStandaloneInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        item_repo=SqlAlchemyInvoiceItemRepository(session),
        sequence_repo=SqlAlchemyInvoiceSequenceRepository(session),
        client_repo=SqlAlchemyClientRepository(session),
        settings_repo=SqlAlchemyInvoiceSettingsRepository(session),
        defaults=defaults,
    )
    command = CreateStandaloneInvoiceCommandDTO(
        **request.model_dump(exclude={"items"}),
        items=[StandaloneItemDTO(**item.model_dump()) for item in request.items],
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.get("", response_model=List[InvoiceResponseDTO])
async def list_invoices(
    user_id: Optional[str] = Query(default=None),
    client_id: Optional[int] = Query(default=None),
    invoice_status: Optional[str] = Query(default=None, alias="status"),
    invoice_type: Optional[str] = Query(default=None),
    date_from: Optional[date] = Query(default=None),
    date_to: Optional[date] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """List invoices (without items), newest issue date first."""
    filters = InvoiceFiltersDTO(
        user_id=user_id,
        client_id=client_id,
        status=invoice_status,
        invoice_type=invoice_type,
        date_from=date_from,
        date_to=date_to,
    )
    result = await ListInvoices(SqlAlchemyInvoiceRepository(session)).execute(filters)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.get("/stats", response_model=InvoiceStatsDTO)
async def get_invoice_stats(
    user_id: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
):
    """Invoice counts and amounts by status; overdue is derived from due dates."""
    result = await GetInvoiceStats(SqlAlchemyInvoiceRepository(session)).execute(user_id=user_id)
    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    responses={404: {"description": "Invoice not found"}},
)
async def get_invoice(invoice_id: int, session: AsyncSession = Depends(get_session)):
    """Invoice with items in sort order."""
    use_case = GetInvoice(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceItemRepository(session),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.patch(
    "/{invoice_id}/status",
    response_model=InvoiceResponseDTO,
    responses={
        404: {"description": "Invoice not found"},
        409: {"description": "Transition not allowed", "content": _ERROR_EXAMPLE},
    },
)
async def update_invoice_status(
    invoice_id: int,
    request: UpdateInvoiceStatusRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Move an invoice along its lifecycle.

    Allowed: draft → issued → sent → paid, issued → paid, overdue → paid.
    Marking an invoice paid marks all its time entries paid.
    """
    use_case = UpdateInvoiceStatus(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        item_repo=SqlAlchemyInvoiceItemRepository(session),
        entry_repo=SqlAlchemyTimeEntryRepository(session),
    )
    result = await use_case.execute(
        UpdateInvoiceStatusCommandDTO(invoice_id=invoice_id, status=request.status)
    )

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Invoice not found"}},
)
async def delete_invoice(invoice_id: int, session: AsyncSession = Depends(get_session)):
    """Delete an invoice; its time entries become unbilled again."""
    use_case = DeleteInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        item_repo=SqlAlchemyInvoiceItemRepository(session),
        entry_repo=SqlAlchemyTimeEntryRepository(session),
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{invoice_id}/payment",
    response_model=PaymentInfoDTO,
    responses={404: {"description": "Invoice not found"}},
)
async def get_payment_info(
    invoice_id: int,
    session: AsyncSession = Depends(get_session),
    defaults: InvoiceDefaults = Depends(get_invoice_defaults),
):
    """Bank transfer details and SPAYD string for the payment QR code."""
    use_case = GetPaymentInfo(
        SqlAlchemyInvoiceRepository(session),
        SqlAlchemyInvoiceSettingsRepository(session),
        defaults=defaults,
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise ClientError.from_error(result.error)
    return result.value
