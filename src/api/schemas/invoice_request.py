"""Request schemas for Invoicing API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator, model_validator
from src.domain.invoice_grouping import GroupBy


class _InvoiceTermsSchema(BaseModel):
    issue_date: date = Field(..., description="Issue date")
    due_date: Optional[date] = Field(default=None, description="Due date (default from settings)")
    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=100,
        description="VAT rate in percent (default from settings)"
    )
    notes: Optional[str] = None
    variable_symbol: Optional[str] = Field(default=None, max_length=10)
    bank_account: Optional[str] = Field(default=None, max_length=50)

    @field_validator('variable_symbol')
    @classmethod
    def validate_variable_symbol(cls, v):
        """Variable symbols are numeric, up to 10 digits"""
        if v is not None and not v.isdigit():
            raise ValueError("Variable symbol must contain digits only")
        return v

    @model_validator(mode='after')
    def validate_due_date(self):
        if self.due_date is not None and self.due_date < self.issue_date:
            raise ValueError("Due date must not be before issue date")
        return self


class CreateLinkedInvoiceRequestSchema(_InvoiceTermsSchema):
    """
    Request schema for invoicing time entries

    Used for POST /billing/invoices/linked endpoint.
    """

    user_id: str = Field(..., min_length=1, description="Owner of the invoice")
    client_id: int = Field(..., description="Client of the selected entries")
    entry_ids: List[int] = Field(..., description="Selected time entries")
    group_by: GroupBy = Field(default=GroupBy.ENTRY, description="entry, phase or day")

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": "user_123",
                "client_id": 7,
                "entry_ids": [101, 102, 103],
                "group_by": "day",
                "issue_date": "2025-03-01",
                "tax_rate": "21"
            }
        }


class StandaloneItemSchema(BaseModel):
    description: str = Field(..., min_length=1, max_length=500)
    quantity: Decimal = Field(..., gt=0)
    unit: str = Field(default="ks", min_length=1, max_length=10)
    unit_price: Decimal = Field(...)


class CreateStandaloneInvoiceRequestSchema(_InvoiceTermsSchema):
    """
    Request schema for an invoice with hand-entered items

    Used for POST /billing/invoices/standalone endpoint.
    """

    user_id: str = Field(..., min_length=1)
    client_id: Optional[int] = None
    client_name: Optional[str] = Field(default=None, max_length=255)
    client_address: Optional[str] = None
    client_ico: Optional[str] = Field(default=None, max_length=20)
    items: List[StandaloneItemSchema] = Field(..., min_length=1)

    @model_validator(mode='after')
    def validate_client(self):
        """A standalone invoice needs a client record or at least a client name"""
        if self.client_id is None and not self.client_name:
            raise ValueError("Either client_id or client_name is required")
        return self


class UpdateInvoiceStatusRequestSchema(BaseModel):
    """Used for PATCH /billing/invoices/{invoice_id}/status endpoint"""

    status: str = Field(..., min_length=1, description="Target status")

    class Config:
        json_schema_extra = {"example": {"status": "issued"}}
