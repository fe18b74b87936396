"""Entity to DTO conversion for invoicing responses"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional
from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem
from src.domain.invoice_lifecycle import effective_status
from src.domain.invoice_totals import InvoiceTotals, to_storage
from src.domain.time_entry import TimeEntry
from .dtos import InvoiceResponseDTO, InvoiceItemDTO, TaxLineDTO, TimeEntryDTO


def _value(enum_or_str) -> str:
    return enum_or_str.value if hasattr(enum_or_str, "value") else enum_or_str


def to_invoice_response(
    invoice: Invoice,
    items: Iterable[InvoiceItem] = (),
    today: Optional[date] = None,
) -> InvoiceResponseDTO:
    totals = InvoiceTotals(
        subtotal=invoice.subtotal,
        tax_rate=invoice.tax_rate,
        tax_amount=invoice.tax_amount,
        total_amount=invoice.total_amount,
    )
    tax_line = totals.tax_line

    return InvoiceResponseDTO(
        invoice_id=invoice.id,
        user_id=invoice.user_id,
        client_id=invoice.client_id,
        client_name=invoice.client_name,
        client_address=invoice.client_address,
        client_ico=invoice.client_ico,
        invoice_number=invoice.invoice_number,
        invoice_type=_value(invoice.invoice_type),
        status=_value(invoice.status),
        effective_status=_value(effective_status(invoice, today)),
        issue_date=invoice.issue_date,
        due_date=invoice.due_date,
        subtotal=invoice.subtotal,
        tax_rate=invoice.tax_rate,
        tax_amount=invoice.tax_amount,
        total_amount=invoice.total_amount,
        tax_line=TaxLineDTO(rate=tax_line.rate, amount=tax_line.amount) if tax_line else None,
        currency=invoice.currency,
        variable_symbol=invoice.variable_symbol,
        bank_account=invoice.bank_account,
        notes=invoice.notes,
        paid_at=invoice.paid_at,
        created_at=invoice.created_at,
        items=[to_item_dto(item) for item in items],
    )


def to_item_dto(item: InvoiceItem) -> InvoiceItemDTO:
    return InvoiceItemDTO(
        item_id=item.id,
        entry_id=item.entry_id,
        phase_id=item.phase_id,
        project_id=item.project_id,
        description=item.description,
        quantity=item.quantity,
        unit=item.unit,
        unit_price=item.unit_price,
        total_price=item.total_price,
        sort_order=item.sort_order,
    )


def to_entry_dto(entry: TimeEntry) -> TimeEntryDTO:
    amount = to_storage(Decimal(entry.duration_minutes) * Decimal(entry.hourly_rate) / Decimal(60))
    return TimeEntryDTO(
        entry_id=entry.id,
        user_id=entry.user_id,
        client_id=entry.client_id,
        phase_id=entry.phase_id,
        project_id=entry.project_id,
        entry_date=entry.entry_date,
        start_time=entry.start_time,
        end_time=entry.end_time,
        duration_minutes=entry.duration_minutes,
        description=entry.description,
        hourly_rate=entry.hourly_rate,
        amount=amount,
        billing_status=_value(entry.billing_status),
        invoice_id=entry.invoice_id,
    )
