"""Get Invoice Stats Use Case

Counts and sums invoices by (effective) status for the dashboard.
"""

from datetime import date
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.invoice import InvoiceStatus
from src.domain.invoice_lifecycle import effective_status
from .dtos import InvoiceStatsDTO


class GetInvoiceStats:
    """
    Invoice statistics

    Overdue is derived: issued/sent invoices past their due date count as
    overdue, not as issued. Unpaid amount covers issued, sent and overdue
    invoices. Cancelled invoices count towards total_count/total_amount only.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(
        self, user_id: Optional[str] = None, today: Optional[date] = None
    ) -> Result[InvoiceStatsDTO]:
        invoices = await self.invoice_repo.find(user_id=user_id)
        stats = InvoiceStatsDTO()

        for invoice in invoices:
            stats.total_count += 1
            stats.total_amount += invoice.total_amount

            status = effective_status(invoice, today)
            if status == InvoiceStatus.DRAFT:
                stats.draft_count += 1
            elif status in (InvoiceStatus.ISSUED, InvoiceStatus.SENT):
                stats.issued_count += 1
                stats.unpaid_amount += invoice.total_amount
            elif status == InvoiceStatus.OVERDUE:
                stats.overdue_count += 1
                stats.unpaid_amount += invoice.total_amount
            elif status == InvoiceStatus.PAID:
                stats.paid_count += 1
                stats.paid_amount += invoice.total_amount
            elif status == InvoiceStatus.CANCELLED:
                stats.cancelled_count += 1

        return Return.ok(stats)
