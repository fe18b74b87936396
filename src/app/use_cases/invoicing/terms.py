"""Invoice terms resolution shared by the create use cases

Request values win, then the user's saved settings, then service defaults.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel
from src.app.repositories.invoice_settings_repository import InvoiceSettingsRepository
from src.app.repositories.invoice_sequence_repository import InvoiceSequenceRepository
from src.domain.invoice_numbering import format_invoice_number
from .dtos import InvoiceDefaults


class InvoiceTerms(BaseModel):
    due_date: date
    tax_rate: Decimal
    currency: str
    bank_account: Optional[str] = None


async def resolve_terms(
    settings_repo: InvoiceSettingsRepository,
    defaults: InvoiceDefaults,
    user_id: str,
    issue_date: date,
    due_date: Optional[date] = None,
    tax_rate: Optional[Decimal] = None,
    bank_account: Optional[str] = None,
) -> InvoiceTerms:
    settings = await settings_repo.get_by_user_id(user_id)

    due_days = settings.default_due_days if settings else defaults.due_days
    default_tax_rate = settings.default_tax_rate if settings else defaults.tax_rate

    return InvoiceTerms(
        due_date=due_date or issue_date + timedelta(days=due_days),
        tax_rate=tax_rate if tax_rate is not None else default_tax_rate,
        currency=(settings.currency if settings else None) or defaults.currency,
        bank_account=bank_account or (settings.bank_account if settings else None) or defaults.bank_account,
    )


async def next_invoice_number(sequence_repo: InvoiceSequenceRepository, issue_date: date) -> str:
    sequence = await sequence_repo.next_value(issue_date.year)
    return format_invoice_number(issue_date.year, sequence)
