"""Time Entry Domain Entity

A logged unit of billable work. Billing fields are only written by the
invoicing use cases.
"""

from datetime import datetime, date, time
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Date, Time
from src.domain.base import BaseModel, BigIntegerId


class BillingStatus(str, Enum):
    """Entry billing status"""
    UNBILLED = "unbilled"
    BILLED = "billed"
    PAID = "paid"


class TimeEntry(BaseModel, table=True):
    """
    Time Entry - Billable work record

    Domain Rules:
    - billing_status is UNBILLED if and only if invoice_id is None
    - BILLED/PAID entries are linked to exactly one invoice
    - duration_minutes is derived from start_time/end_time
    """

    __tablename__ = "time_entries"
    __table_args__ = (
        Index('ix_time_entries_client_billing', 'client_id', 'billing_status'),
        Index('ix_time_entries_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
        description="Unique entry identifier (auto-increment)"
    )

    user_id: str = Field(
        index=True,
        description="Owner of the entry"
    )

    client_id: int = Field(
        sa_column=Column(BigIntegerId, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False),
        description="Client the work was done for"
    )

    phase_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, ForeignKey("phases.id", ondelete="SET NULL"), nullable=True),
        description="Optional phase of the client's work"
    )

    project_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, nullable=True),
        description="Optional project of the client's work"
    )

    entry_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Day the work was performed"
    )

    start_time: time = Field(
        sa_column=Column(Time, nullable=False),
        description="Work start"
    )

    end_time: time = Field(
        sa_column=Column(Time, nullable=False),
        description="Work end"
    )

    duration_minutes: int = Field(
        description="Duration in minutes (end_time - start_time)"
    )

    description: str = Field(
        default="",
        sa_column=Column(String(500), nullable=False, default=""),
        description="What was done"
    )

    hourly_rate: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Hourly rate (precision: 18,6)"
    )

    billing_status: BillingStatus = Field(
        default=BillingStatus.UNBILLED,
        description="Billing status (unbilled, billed, paid)"
    )

    invoice_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, ForeignKey("invoices.id", ondelete="RESTRICT"), nullable=True),
        description="Invoice the entry is billed on"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Entry creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    @staticmethod
    def minutes_between(start: time, end: time) -> int:
        """Duration of a same-day interval in whole minutes"""
        return (end.hour * 60 + end.minute) - (start.hour * 60 + start.minute)
