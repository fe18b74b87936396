"""Unit tests for invoice status transitions and derived overdue"""

import pytest
from datetime import date
from decimal import Decimal

from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_lifecycle import (
    can_transition,
    effective_status,
    is_overdue,
    INITIAL_STATUS,
    TERMINAL_STATUSES,
)


def _invoice(status: InvoiceStatus, due_date: date = date(2025, 3, 15)) -> Invoice:
    return Invoice(
        id=1,
        user_id="user_123",
        invoice_number="2025-0001",
        issue_date=date(2025, 3, 1),
        due_date=due_date,
        status=status,
        subtotal=Decimal("1000"),
        tax_rate=Decimal("0"),
        tax_amount=Decimal("0"),
        total_amount=Decimal("1000"),
    )


class TestTransitions:

    @pytest.mark.parametrize(
        "current,target",
        [
            (InvoiceStatus.DRAFT, InvoiceStatus.ISSUED),
            (InvoiceStatus.ISSUED, InvoiceStatus.SENT),
            (InvoiceStatus.ISSUED, InvoiceStatus.PAID),
            (InvoiceStatus.SENT, InvoiceStatus.PAID),
            (InvoiceStatus.OVERDUE, InvoiceStatus.PAID),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (InvoiceStatus.DRAFT, InvoiceStatus.PAID),
            (InvoiceStatus.DRAFT, InvoiceStatus.SENT),
            (InvoiceStatus.SENT, InvoiceStatus.ISSUED),
            (InvoiceStatus.ISSUED, InvoiceStatus.OVERDUE),
            (InvoiceStatus.ISSUED, InvoiceStatus.CANCELLED),
            (InvoiceStatus.ISSUED, InvoiceStatus.ISSUED),
            (InvoiceStatus.PAID, InvoiceStatus.ISSUED),
            (InvoiceStatus.CANCELLED, InvoiceStatus.PAID),
        ],
    )
    def test_rejected(self, current, target):
        assert not can_transition(current, target)

    def test_initial_and_terminal_states(self):
        assert INITIAL_STATUS == InvoiceStatus.DRAFT
        assert TERMINAL_STATUSES == {InvoiceStatus.PAID, InvoiceStatus.CANCELLED}


class TestOverdue:

    def test_issued_past_due_is_overdue(self):
        invoice = _invoice(InvoiceStatus.ISSUED)

        assert is_overdue(invoice, today=date(2025, 3, 16))
        assert effective_status(invoice, today=date(2025, 3, 16)) == InvoiceStatus.OVERDUE

    def test_due_today_is_not_overdue(self):
        invoice = _invoice(InvoiceStatus.SENT)

        assert not is_overdue(invoice, today=date(2025, 3, 15))
        assert effective_status(invoice, today=date(2025, 3, 15)) == InvoiceStatus.SENT

    @pytest.mark.parametrize("status", [InvoiceStatus.DRAFT, InvoiceStatus.PAID, InvoiceStatus.CANCELLED])
    def test_only_open_invoices_become_overdue(self, status):
        invoice = _invoice(status)

        assert effective_status(invoice, today=date(2026, 1, 1)) == status

    def test_overdue_is_never_written(self):
        invoice = _invoice(InvoiceStatus.ISSUED)

        effective_status(invoice, today=date(2026, 1, 1))

        assert invoice.status == InvoiceStatus.ISSUED
