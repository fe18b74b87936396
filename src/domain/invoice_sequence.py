"""Invoice Sequence Domain Entity

Per-year counter behind invoice numbers. The row is locked while a number
is taken so concurrent creators cannot draw the same value.
"""

from sqlmodel import Field
from src.domain.base import BaseModel


class InvoiceSequence(BaseModel, table=True):
    __tablename__ = "invoice_sequences"

    year: int = Field(primary_key=True, description="Calendar year of issue")

    last_value: int = Field(default=0, description="Last sequence number handed out")
