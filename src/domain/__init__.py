from .base import BaseModel
from .client import Client, Phase
from .time_entry import TimeEntry, BillingStatus
from .invoice import Invoice, InvoiceStatus, InvoiceType
from .invoice_item import InvoiceItem
from .invoice_sequence import InvoiceSequence
from .invoice_settings import InvoiceSettings

__all__ = [
    "BaseModel",
    "Client",
    "Phase",
    "TimeEntry",
    "BillingStatus",
    "Invoice",
    "InvoiceStatus",
    "InvoiceType",
    "InvoiceItem",
    "InvoiceSequence",
    "InvoiceSettings",
]
