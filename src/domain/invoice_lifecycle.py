r"""Invoice Lifecycle

Status transition table and the derived overdue status.

    draft -> issued -> sent -> paid
                 \----------> paid
    overdue (stored legacy value) -> paid

paid and cancelled are terminal. overdue is never written by the service;
it is computed from status and due date at read time.
"""

from datetime import date
from typing import Dict, FrozenSet, Optional
from src.domain.invoice import Invoice, InvoiceStatus

ALLOWED_TRANSITIONS: Dict[InvoiceStatus, FrozenSet[InvoiceStatus]] = {
    InvoiceStatus.DRAFT: frozenset({InvoiceStatus.ISSUED}),
    InvoiceStatus.ISSUED: frozenset({InvoiceStatus.SENT, InvoiceStatus.PAID}),
    InvoiceStatus.SENT: frozenset({InvoiceStatus.PAID}),
    InvoiceStatus.OVERDUE: frozenset({InvoiceStatus.PAID}),
    InvoiceStatus.PAID: frozenset(),
    InvoiceStatus.CANCELLED: frozenset(),
}

INITIAL_STATUS = InvoiceStatus.DRAFT
TERMINAL_STATUSES = frozenset({InvoiceStatus.PAID, InvoiceStatus.CANCELLED})

# Statuses that can become overdue once the due date passes
OPEN_STATUSES = frozenset({InvoiceStatus.ISSUED, InvoiceStatus.SENT})


def can_transition(current: InvoiceStatus, target: InvoiceStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def is_overdue(invoice: Invoice, today: Optional[date] = None) -> bool:
    today = today or date.today()
    return invoice.status in OPEN_STATUSES and invoice.due_date < today


def effective_status(invoice: Invoice, today: Optional[date] = None) -> InvoiceStatus:
    """Status to show: stored status, or overdue for open invoices past due"""
    if is_overdue(invoice, today):
        return InvoiceStatus.OVERDUE
    return invoice.status
