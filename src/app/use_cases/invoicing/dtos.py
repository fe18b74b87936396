"""Data Transfer Objects for Invoicing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime, date, time
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field
from src.domain.invoice_grouping import GroupBy


class InvoiceDefaults(BaseModel):
    """
    Fallbacks used when neither the request nor the user's settings
    provide a value
    """

    due_days: int = Field(default=14, ge=0)
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0)
    currency: str = Field(default="CZK", min_length=3, max_length=3)
    bank_account: Optional[str] = None


class CreateLinkedInvoiceCommandDTO(BaseModel):
    """
    Command DTO for invoicing selected time entries

    Used as input to CreateLinkedInvoice use case.
    """

    user_id: str = Field(
        ...,
        description="Owner of the invoice"
    )

    client_id: int = Field(
        ...,
        description="Client all selected entries belong to"
    )

    entry_ids: List[int] = Field(
        default_factory=list,
        description="Time entries to invoice"
    )

    group_by: GroupBy = Field(
        default=GroupBy.ENTRY,
        description="Line grouping strategy (entry, phase, day)"
    )

    issue_date: date = Field(
        ...,
        description="Issue date; its year scopes the invoice number"
    )

    due_date: Optional[date] = Field(
        default=None,
        description="Due date (default: issue_date + default due days)"
    )

    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="VAT rate in percent (default: user's default tax rate)"
    )

    notes: Optional[str] = None
    variable_symbol: Optional[str] = None
    bank_account: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "user_123",
                "client_id": 7,
                "entry_ids": [101, 102, 103],
                "group_by": "phase",
                "issue_date": "2025-03-01",
                "due_date": "2025-03-15",
                "tax_rate": "21",
                "notes": "Děkujeme za spolupráci"
            }
        }


class StandaloneItemDTO(BaseModel):
    """Free-form invoice line"""

    description: str = Field(..., min_length=1)
    quantity: Decimal = Field(..., gt=0)
    unit: str = Field(default="ks", min_length=1, max_length=10)
    unit_price: Decimal = Field(...)


class CreateStandaloneInvoiceCommandDTO(BaseModel):
    """
    Command DTO for an invoice with hand-entered items

    Used as input to CreateStandaloneInvoice use case. Either client_id or
    the free-text client fields identify the customer.
    """

    user_id: str = Field(..., description="Owner of the invoice")
    client_id: Optional[int] = Field(default=None, description="Known client, if any")
    client_name: Optional[str] = None
    client_address: Optional[str] = None
    client_ico: Optional[str] = None
    items: List[StandaloneItemDTO] = Field(..., min_length=1)
    issue_date: date
    due_date: Optional[date] = None
    tax_rate: Optional[Decimal] = Field(default=None, ge=0)
    notes: Optional[str] = None
    variable_symbol: Optional[str] = None
    bank_account: Optional[str] = None


class UpdateInvoiceStatusCommandDTO(BaseModel):
    invoice_id: int
    status: str = Field(..., description="Target status")


class InvoiceFiltersDTO(BaseModel):
    """Filters for listing invoices; all optional and combined with AND"""

    user_id: Optional[str] = None
    client_id: Optional[int] = None
    status: Optional[str] = None
    invoice_type: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None


class InvoiceItemDTO(BaseModel):
    item_id: int
    entry_id: Optional[int] = None
    phase_id: Optional[int] = None
    project_id: Optional[int] = None
    description: str
    quantity: Decimal
    unit: str
    unit_price: Decimal
    total_price: Decimal
    sort_order: int


class TaxLineDTO(BaseModel):
    rate: Decimal
    amount: Decimal


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    status is the stored status; effective_status reports overdue for
    issued/sent invoices past their due date.
    """

    invoice_id: int = Field(..., description="Invoice ID")
    user_id: str
    client_id: Optional[int] = None
    client_name: Optional[str] = None
    client_address: Optional[str] = None
    client_ico: Optional[str] = None
    invoice_number: str = Field(..., description="Invoice number (YYYY-NNNN)")
    invoice_type: str
    status: str
    effective_status: str
    issue_date: date
    due_date: date
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    tax_line: Optional[TaxLineDTO] = Field(
        default=None,
        description="VAT line; absent when the tax rate is zero"
    )
    currency: str
    variable_symbol: Optional[str] = None
    bank_account: Optional[str] = None
    notes: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: datetime
    items: List[InvoiceItemDTO] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": 1,
                "user_id": "user_123",
                "client_id": 7,
                "client_name": "ACME s.r.o.",
                "invoice_number": "2025-0007",
                "invoice_type": "linked",
                "status": "draft",
                "effective_status": "draft",
                "issue_date": "2025-03-01",
                "due_date": "2025-03-15",
                "subtotal": "3000.000000",
                "tax_rate": "21.00",
                "tax_amount": "630.000000",
                "total_amount": "3630.000000",
                "tax_line": {"rate": "21.00", "amount": "630.000000"},
                "currency": "CZK",
                "variable_symbol": "20250007",
                "created_at": "2025-03-01T09:00:00Z",
                "items": []
            }
        }


class DeleteInvoiceResponseDTO(BaseModel):
    invoice_id: int
    invoice_number: str
    released_entries: int = Field(..., description="Entries reset to unbilled")


class TimeEntryDTO(BaseModel):
    entry_id: int
    user_id: str
    client_id: int
    phase_id: Optional[int] = None
    project_id: Optional[int] = None
    entry_date: date
    start_time: time
    end_time: time
    duration_minutes: int
    description: str
    hourly_rate: Decimal
    amount: Decimal = Field(..., description="duration in hours * hourly_rate")
    billing_status: str
    invoice_id: Optional[int] = None


class InvoiceStatsDTO(BaseModel):
    """
    Invoice counts and amounts by status

    issued_count covers issued and sent invoices that are not past due;
    those past due are counted in overdue_count instead.
    """

    total_count: int = 0
    draft_count: int = 0
    issued_count: int = 0
    paid_count: int = 0
    overdue_count: int = 0
    cancelled_count: int = 0
    total_amount: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")
    unpaid_amount: Decimal = Decimal("0")


class PaymentInfoDTO(BaseModel):
    invoice_id: int
    invoice_number: str
    amount: Decimal
    currency: str
    bank_account: Optional[str] = None
    iban: Optional[str] = None
    variable_symbol: str
    spayd: Optional[str] = Field(
        default=None,
        description="Short Payment Descriptor for payment QR codes"
    )
