"""Invoicing use cases"""
from .create_linked_invoice import CreateLinkedInvoice
from .create_standalone_invoice import CreateStandaloneInvoice
from .update_invoice_status import UpdateInvoiceStatus
from .delete_invoice import DeleteInvoice
from .get_unbilled_entries import GetUnbilledEntries
from .get_invoice_stats import GetInvoiceStats
from .list_invoices import ListInvoices
from .get_invoice import GetInvoice
from .get_payment_info import GetPaymentInfo
from .dtos import (
    InvoiceDefaults,
    CreateLinkedInvoiceCommandDTO,
    StandaloneItemDTO,
    CreateStandaloneInvoiceCommandDTO,
    UpdateInvoiceStatusCommandDTO,
    InvoiceFiltersDTO,
    InvoiceItemDTO,
    TaxLineDTO,
    InvoiceResponseDTO,
    DeleteInvoiceResponseDTO,
    TimeEntryDTO,
    InvoiceStatsDTO,
    PaymentInfoDTO,
)

__all__ = [
    "CreateLinkedInvoice",
    "CreateStandaloneInvoice",
    "UpdateInvoiceStatus",
    "DeleteInvoice",
    "GetUnbilledEntries",
    "GetInvoiceStats",
    "ListInvoices",
    "GetInvoice",
    "GetPaymentInfo",
    "InvoiceDefaults",
    "CreateLinkedInvoiceCommandDTO",
    "StandaloneItemDTO",
    "CreateStandaloneInvoiceCommandDTO",
    "UpdateInvoiceStatusCommandDTO",
    "InvoiceFiltersDTO",
    "InvoiceItemDTO",
    "TaxLineDTO",
    "InvoiceResponseDTO",
    "DeleteInvoiceResponseDTO",
    "TimeEntryDTO",
    "InvoiceStatsDTO",
    "PaymentInfoDTO",
]
