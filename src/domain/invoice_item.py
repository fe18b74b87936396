"""Invoice Item Domain Entity

Tracks individual line items within an invoice.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String
from src.domain.base import BaseModel, BigIntegerId


class InvoiceItem(BaseModel, table=True):
    """
    Invoice Item - Individual line item within an invoice

    Domain Rules:
    - Each item belongs to exactly one invoice and is deleted with it
    - total_price = quantity * unit_price
    - Immutable once created
    - entry_id points back to the originating time entry (entry grouping only)
    """

    __tablename__ = "invoice_items"
    __table_args__ = (
        Index('ix_invoice_items_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
        description="Unique invoice item identifier (auto-increment)"
    )

    invoice_id: int = Field(
        sa_column=Column(BigIntegerId, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    entry_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, ForeignKey("time_entries.id", ondelete="SET NULL"), nullable=True),
        description="Originating time entry"
    )

    phase_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, ForeignKey("phases.id", ondelete="SET NULL"), nullable=True),
    )

    project_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, nullable=True),
    )

    description: str = Field(
        sa_column=Column(String(500), nullable=False),
        description="Line item description"
    )

    quantity: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Quantity (hours for entry-based items)"
    )

    unit: str = Field(
        default="ks",
        sa_column=Column(String(10), nullable=False),
        description="Unit label (hod = hours, ks = pieces)"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Price per unit (precision: 18,6)"
    )

    total_price: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Total price (quantity * unit_price)"
    )

    sort_order: int = Field(
        default=0,
        description="Position on the invoice"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Line item creation timestamp"
    )
