from .invoice_repository import SqlAlchemyInvoiceRepository
from .invoice_item_repository import SqlAlchemyInvoiceItemRepository
from .invoice_sequence_repository import SqlAlchemyInvoiceSequenceRepository
from .invoice_settings_repository import SqlAlchemyInvoiceSettingsRepository
from .time_entry_repository import SqlAlchemyTimeEntryRepository
from .client_repository import SqlAlchemyClientRepository, SqlAlchemyPhaseRepository

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyInvoiceItemRepository",
    "SqlAlchemyInvoiceSequenceRepository",
    "SqlAlchemyInvoiceSettingsRepository",
    "SqlAlchemyTimeEntryRepository",
    "SqlAlchemyClientRepository",
    "SqlAlchemyPhaseRepository",
]
