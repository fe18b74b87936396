"""Integration tests for invoice creation, status changes and deletion

Tests cover:
- Linked invoice end to end with real repositories
- Overlapping selections never bill an entry twice
- Paid cascade to entries
- Create/delete round trip restores entries
- A short claim leaves no invoice, item or sequence row behind
"""

import pytest
from datetime import date
from decimal import Decimal

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories import (
    SqlAlchemyInvoiceRepository,
    SqlAlchemyInvoiceItemRepository,
    SqlAlchemyInvoiceSequenceRepository,
    SqlAlchemyInvoiceSettingsRepository,
    SqlAlchemyTimeEntryRepository,
    SqlAlchemyClientRepository,
    SqlAlchemyPhaseRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.invoicing import (
    CreateLinkedInvoice,
    UpdateInvoiceStatus,
    DeleteInvoice,
    GetUnbilledEntries,
    CreateLinkedInvoiceCommandDTO,
    UpdateInvoiceStatusCommandDTO,
)
from src.domain import Invoice, InvoiceItem, InvoiceSequence, TimeEntry, BillingStatus, InvoiceStatus
from src.domain.invoice_grouping import GroupBy


def _create_linked(session: AsyncSession) -> CreateLinkedInvoice:
    return CreateLinkedInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        item_repo=SqlAlchemyInvoiceItemRepository(session),
        entry_repo=SqlAlchemyTimeEntryRepository(session),
        sequence_repo=SqlAlchemyInvoiceSequenceRepository(session),
        client_repo=SqlAlchemyClientRepository(session),
        phase_repo=SqlAlchemyPhaseRepository(session),
        settings_repo=SqlAlchemyInvoiceSettingsRepository(session),
    )


def _update_status(session: AsyncSession) -> UpdateInvoiceStatus:
    return UpdateInvoiceStatus(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        item_repo=SqlAlchemyInvoiceItemRepository(session),
        entry_repo=SqlAlchemyTimeEntryRepository(session),
    )


def _delete(session: AsyncSession) -> DeleteInvoice:
    return DeleteInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        item_repo=SqlAlchemyInvoiceItemRepository(session),
        entry_repo=SqlAlchemyTimeEntryRepository(session),
    )


def _command(seeded, entry_ids, **overrides):
    data = dict(
        user_id="user_123",
        client_id=seeded["client"].id,
        entry_ids=entry_ids,
        issue_date=date(2025, 3, 5),
        tax_rate=Decimal("21"),
    )
    data.update(overrides)
    return CreateLinkedInvoiceCommandDTO(**data)


async def _entries(session: AsyncSession):
    result = await session.execute(select(TimeEntry).order_by(TimeEntry.id))
    return list(result.scalars().all())


@pytest.mark.asyncio
class TestLinkedInvoiceIntegration:

    async def test_end_to_end_linked_invoice(self, db_session: AsyncSession, seeded):
        entries = seeded["entries"]

        result = await _create_linked(db_session).execute(_command(seeded, [e.id for e in entries]))

        assert result.is_ok()
        response = result.value
        assert response.invoice_number == "2025-0001"
        assert response.subtotal == Decimal("3000")
        assert response.tax_amount == Decimal("630")
        assert response.total_amount == Decimal("3630")
        assert response.client_name == "ACME s.r.o."

        invoice = await SqlAlchemyInvoiceRepository(db_session).get_by_id(response.invoice_id)
        assert invoice.status == InvoiceStatus.DRAFT

        items = await SqlAlchemyInvoiceItemRepository(db_session).get_by_invoice_id(response.invoice_id)
        assert [item.entry_id for item in items] == [e.id for e in entries]

        for entry in await _entries(db_session):
            assert entry.billing_status == BillingStatus.BILLED
            assert entry.invoice_id == response.invoice_id

    async def test_phase_grouping_uses_phase_names(self, db_session: AsyncSession, seeded):
        entries = seeded["entries"]

        result = await _create_linked(db_session).execute(
            _command(seeded, [e.id for e in entries], group_by=GroupBy.PHASE)
        )

        items = result.value.items
        assert [item.description for item in items] == ["Vývoj", "Bez fáze"]
        assert [item.quantity for item in items] == [Decimal("2.5"), Decimal("0.5")]

    async def test_overlapping_selection_is_rejected(self, db_session: AsyncSession, seeded):
        """
        Given: invoice 1 billed entries A and B
        When: invoice 2 is requested for B and C
        Then: ENTRY_ALREADY_CLAIMED, C stays unbilled and only one invoice exists
        """
        a_id, b_id, c_id = [e.id for e in seeded["entries"]]
        first = await _create_linked(db_session).execute(_command(seeded, [a_id, b_id]))
        assert first.is_ok()

        second = await _create_linked(db_session).execute(_command(seeded, [b_id, c_id]))

        assert second.is_err()
        assert second.error.code == "ENTRY_ALREADY_CLAIMED"

        invoices = (await db_session.execute(select(Invoice))).scalars().all()
        assert len(invoices) == 1
        stored = {entry.id: entry for entry in await _entries(db_session)}
        assert stored[b_id].invoice_id == first.value.invoice_id
        assert stored[c_id].billing_status == BillingStatus.UNBILLED
        assert stored[c_id].invoice_id is None

    async def test_conditional_claim_counts_only_unbilled(self, db_session: AsyncSession, seeded):
        a, b, c = seeded["entries"]
        first = await _create_linked(db_session).execute(_command(seeded, [a.id, b.id]))

        claimed = await SqlAlchemyTimeEntryRepository(db_session).claim_unbilled(
            [b.id, c.id], first.value.invoice_id
        )

        assert claimed == 1

    async def test_entries_of_another_client(self, db_session: AsyncSession, seeded):
        entries = seeded["entries"]

        result = await _create_linked(db_session).execute(
            _command(seeded, [e.id for e in entries], client_id=seeded["other_client"].id)
        )

        assert result.error.code == "ENTRY_CLIENT_MISMATCH"
        for entry in await _entries(db_session):
            assert entry.billing_status == BillingStatus.UNBILLED

    async def test_unknown_entry(self, db_session: AsyncSession, seeded):
        result = await _create_linked(db_session).execute(_command(seeded, [seeded["entries"][0].id, 999]))

        assert result.error.code == "ENTRY_NOT_FOUND"


class ShortClaimTimeEntryRepository(SqlAlchemyTimeEntryRepository):
    """Reports one entry fewer than it claimed, as if a concurrent invoice took it"""

    async def claim_unbilled(self, entry_ids, invoice_id):
        return await super().claim_unbilled(entry_ids, invoice_id) - 1


@pytest.mark.asyncio
class TestShortClaimIntegration:

    async def test_short_claim_leaves_nothing_behind(self, db_session: AsyncSession, seeded):
        """
        Given: three unbilled entries and a claim that comes up one short
        When: a linked invoice is requested for all three
        Then: ENTRY_ALREADY_CLAIMED; no invoice, item or sequence row survives
              and every entry is unbilled again
        """
        entry_ids = [e.id for e in seeded["entries"]]
        command = _command(seeded, entry_ids)
        use_case = _create_linked(db_session)
        use_case.entry_repo = ShortClaimTimeEntryRepository(db_session)

        result = await use_case.execute(command)

        assert result.is_err()
        assert result.error.code == "ENTRY_ALREADY_CLAIMED"
        assert (await db_session.execute(select(Invoice))).scalars().all() == []
        assert (await db_session.execute(select(InvoiceItem))).scalars().all() == []
        assert (await db_session.execute(select(InvoiceSequence))).scalars().all() == []
        stored = await _entries(db_session)
        assert [entry.id for entry in stored] == entry_ids
        for entry in stored:
            assert entry.billing_status == BillingStatus.UNBILLED
            assert entry.invoice_id is None

    async def test_numbering_continues_after_short_claim(self, db_session: AsyncSession, seeded):
        entry_ids = [e.id for e in seeded["entries"]]
        aborted = _create_linked(db_session)
        aborted.entry_repo = ShortClaimTimeEntryRepository(db_session)
        await aborted.execute(_command(seeded, entry_ids))

        result = await _create_linked(db_session).execute(_command(seeded, entry_ids))

        assert result.is_ok()
        assert result.value.invoice_number == "2025-0001"


@pytest.mark.asyncio
class TestStatusAndDeleteIntegration:

    async def test_paid_marks_entries_paid(self, db_session: AsyncSession, seeded):
        entries = seeded["entries"]
        created = await _create_linked(db_session).execute(_command(seeded, [e.id for e in entries]))
        invoice_id = created.value.invoice_id

        for status in ("issued", "sent", "paid"):
            result = await _update_status(db_session).execute(
                UpdateInvoiceStatusCommandDTO(invoice_id=invoice_id, status=status)
            )
            assert result.is_ok(), result.error

        assert result.value.paid_at is not None
        assert len(result.value.items) == 3
        for entry in await _entries(db_session):
            assert entry.billing_status == BillingStatus.PAID

    async def test_draft_to_paid_is_rejected(self, db_session: AsyncSession, seeded):
        created = await _create_linked(db_session).execute(_command(seeded, [seeded["entries"][0].id]))

        result = await _update_status(db_session).execute(
            UpdateInvoiceStatusCommandDTO(invoice_id=created.value.invoice_id, status="paid")
        )

        assert result.error.code == "INVALID_TRANSITION"
        invoice = await SqlAlchemyInvoiceRepository(db_session).get_by_id(created.value.invoice_id)
        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.paid_at is None

    async def test_create_then_delete_restores_entries(self, db_session: AsyncSession, seeded):
        entries = seeded["entries"]
        created = await _create_linked(db_session).execute(_command(seeded, [e.id for e in entries]))
        invoice_id = created.value.invoice_id

        result = await _delete(db_session).execute(invoice_id)

        assert result.is_ok()
        assert result.value.released_entries == 3
        assert await SqlAlchemyInvoiceRepository(db_session).get_by_id(invoice_id) is None
        items = (await db_session.execute(select(InvoiceItem))).scalars().all()
        assert items == []
        for entry in await _entries(db_session):
            assert entry.billing_status == BillingStatus.UNBILLED
            assert entry.invoice_id is None

        unbilled = await GetUnbilledEntries(SqlAlchemyTimeEntryRepository(db_session)).execute(
            client_id=seeded["client"].id
        )
        assert len(unbilled.value) == 3

    async def test_second_delete_is_not_found(self, db_session: AsyncSession, seeded):
        a_id, _, c_id = [e.id for e in seeded["entries"]]
        created = await _create_linked(db_session).execute(_command(seeded, [a_id]))
        await _delete(db_session).execute(created.value.invoice_id)

        # c goes onto a new invoice; a repeated delete must not release it
        other = await _create_linked(db_session).execute(_command(seeded, [c_id]))
        result = await _delete(db_session).execute(created.value.invoice_id)

        assert result.error.code == "INVOICE_NOT_FOUND"
        stored = {entry.id: entry for entry in await _entries(db_session)}
        assert stored[c_id].invoice_id == other.value.invoice_id
        assert stored[c_id].billing_status == BillingStatus.BILLED


@pytest.mark.asyncio
class TestUnbilledEntriesIntegration:

    async def test_newest_first(self, db_session: AsyncSession, seeded):
        result = await GetUnbilledEntries(SqlAlchemyTimeEntryRepository(db_session)).execute(
            client_id=seeded["client"].id
        )

        descriptions = [entry.description for entry in result.value]
        assert descriptions == ["Review", "Implementace", "Analýza"]
        assert result.value[1].amount == Decimal("1500")
