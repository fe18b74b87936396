"""Get Payment Info Use Case

Bank transfer details for an invoice: IBAN, variable symbol and the SPAYD
string rendered into payment QR codes by the client application.
"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.invoice_settings_repository import InvoiceSettingsRepository
from src.domain.invoice_numbering import variable_symbol_for
from src.domain.payment import build_spayd, convert_czech_account_to_iban
from . import errors
from .dtos import InvoiceDefaults, PaymentInfoDTO


class GetPaymentInfo:
    """
    Payment details of an invoice

    Bank account: the invoice's own, else the owner's settings, else the
    service default. Without a usable account iban and spayd are None.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        settings_repo: InvoiceSettingsRepository,
        defaults: Optional[InvoiceDefaults] = None,
    ):
        self.invoice_repo = invoice_repo
        self.settings_repo = settings_repo
        self.defaults = defaults or InvoiceDefaults()

    async def execute(self, invoice_id: int) -> Result[PaymentInfoDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)
        if not invoice:
            return Return.err(errors.invoice_not_found(invoice_id))

        bank_account = invoice.bank_account
        if not bank_account:
            settings = await self.settings_repo.get_by_user_id(invoice.user_id)
            bank_account = (settings.bank_account if settings else None) or self.defaults.bank_account

        variable_symbol = invoice.variable_symbol or variable_symbol_for(invoice.invoice_number)

        iban = None
        spayd = None
        if bank_account:
            iban = convert_czech_account_to_iban(bank_account)
            spayd = build_spayd(
                bank_account,
                invoice.total_amount,
                currency=invoice.currency,
                vs=variable_symbol,
                message=f"Faktura {invoice.invoice_number}",
            )

        return Return.ok(
            PaymentInfoDTO(
                invoice_id=invoice.id,
                invoice_number=invoice.invoice_number,
                amount=invoice.total_amount,
                currency=invoice.currency,
                bank_account=bank_account,
                iban=iban,
                variable_symbol=variable_symbol,
                spayd=spayd,
            )
        )
