"""Invoice Settings Domain Entity

Per-user defaults applied when an invoice request leaves a field empty.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Numeric, String
from src.domain.base import BaseModel


class InvoiceSettings(BaseModel, table=True):
    __tablename__ = "invoice_settings"

    user_id: str = Field(primary_key=True)

    default_due_days: int = Field(default=14, description="Days from issue date to due date")

    default_tax_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(5, 2), nullable=False, default=0),
        description="VAT rate in percent (0 = not VAT registered)"
    )

    bank_account: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Czech account (prefix-number/bank) or IBAN"
    )

    currency: str = Field(
        default="CZK",
        sa_column=Column(String(3), nullable=False, default="CZK"),
    )

    updated_at: datetime = Field(default_factory=datetime.utcnow)
