from .invoice_repository import InvoiceRepository
from .invoice_item_repository import InvoiceItemRepository
from .invoice_sequence_repository import InvoiceSequenceRepository
from .invoice_settings_repository import InvoiceSettingsRepository
from .time_entry_repository import TimeEntryRepository
from .client_repository import ClientRepository, PhaseRepository

__all__ = [
    "InvoiceRepository",
    "InvoiceItemRepository",
    "InvoiceSequenceRepository",
    "InvoiceSettingsRepository",
    "TimeEntryRepository",
    "ClientRepository",
    "PhaseRepository",
]
