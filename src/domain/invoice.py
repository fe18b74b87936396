"""Invoice Domain Entity

Billing document generated from time entries (linked) or from free-form
items (standalone).
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Date, Text
from src.domain.base import BaseModel, BigIntegerId


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    ISSUED = "issued"
    SENT = "sent"
    PAID = "paid"
    CANCELLED = "cancelled"
    OVERDUE = "overdue"


class InvoiceType(str, Enum):
    """How the invoice items were produced"""
    LINKED = "linked"          # Grouped from time entries
    STANDALONE = "standalone"  # Entered by hand


class Invoice(BaseModel, table=True):
    """
    Invoice - Billing document for a client

    Domain Rules:
    - invoice_number is unique (YYYY-NNNN, sequence per year of issue)
    - Created as draft; status moves only along the lifecycle table
    - At creation: total_amount = subtotal + tax_amount,
      tax_amount = subtotal * tax_rate / 100
    - paid_at is set only on transition to paid
    - client_name/client_address/client_ico snapshot the client at creation
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_user_id', 'user_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_issue_date', 'issue_date'),
        # Deleted invoice ids are never handed out again
        {"sqlite_autoincrement": True},
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    user_id: str = Field(
        description="Owner of the invoice"
    )

    client_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True),
        description="Client (None for standalone invoices to ad-hoc clients)"
    )

    client_name: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    client_address: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    client_ico: Optional[str] = Field(
        default=None,
        sa_column=Column(String(20), nullable=True),
    )

    invoice_number: str = Field(
        sa_column=Column(String(20), nullable=False, unique=True),
        description="Unique invoice number (e.g., 2025-0007)"
    )

    issue_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    due_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    invoice_type: InvoiceType = Field(
        default=InvoiceType.LINKED,
        description="Invoice type (linked, standalone)"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status"
    )

    subtotal: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
    )

    tax_rate: Decimal = Field(
        sa_column=Column(Numeric(5, 2), nullable=False),
        description="VAT rate in percent"
    )

    tax_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
    )

    total_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
    )

    currency: str = Field(
        default="CZK",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    variable_symbol: Optional[str] = Field(
        default=None,
        sa_column=Column(String(10), nullable=True),
        description="Payment identification code for bank transfers"
    )

    bank_account: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    internal_notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Notes never printed on the invoice"
    )

    paid_at: Optional[datetime] = Field(
        default=None,
        description="Timestamp when invoice was paid"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )
