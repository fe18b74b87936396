"""Integration tests for Invoicing API endpoints"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from httpx import AsyncClient


def _linked_payload(seeded, entry_ids, **overrides):
    payload = {
        "user_id": "user_123",
        "client_id": seeded["client"].id,
        "entry_ids": entry_ids,
        "group_by": "day",
        "issue_date": "2025-03-05",
        "tax_rate": "21",
    }
    payload.update(overrides)
    return payload


class TestInvoicingAPIIntegration:
    """Integration test suite for Invoicing API endpoints"""

    @pytest.mark.asyncio
    async def test_create_linked_invoice(self, client: AsyncClient, seeded):
        """POST /linked returns 201 with grouped items and totals"""
        entry_ids = [e.id for e in seeded["entries"]]

        response = await client.post("/billing/invoices/linked", json=_linked_payload(seeded, entry_ids))

        assert response.status_code == 201
        data = response.json()
        assert data["invoice_number"] == "2025-0001"
        assert data["status"] == "draft"
        assert len(data["items"]) == 2
        assert Decimal(data["items"][0]["quantity"]) == Decimal("2.5")
        assert Decimal(data["subtotal"]) == Decimal("3000")
        assert Decimal(data["total_amount"]) == Decimal("3630")

        unbilled = await client.get("/billing/entries/unbilled", params={"client_id": seeded["client"].id})
        assert unbilled.status_code == 200
        assert unbilled.json() == []

    @pytest.mark.asyncio
    async def test_overlapping_invoice_returns_409(self, client: AsyncClient, seeded):
        a, b, c = seeded["entries"]
        first = await client.post("/billing/invoices/linked", json=_linked_payload(seeded, [a.id, b.id]))
        assert first.status_code == 201

        response = await client.post("/billing/invoices/linked", json=_linked_payload(seeded, [b.id, c.id]))

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ENTRY_ALREADY_CLAIMED"

    @pytest.mark.asyncio
    async def test_empty_selection_returns_422(self, client: AsyncClient, seeded):
        response = await client.post("/billing/invoices/linked", json=_linked_payload(seeded, []))

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "NO_BILLABLE_ENTRIES"

    @pytest.mark.asyncio
    async def test_due_date_before_issue_date_returns_400(self, client: AsyncClient, seeded):
        payload = _linked_payload(seeded, [seeded["entries"][0].id], due_date="2025-03-01")

        response = await client.post("/billing/invoices/linked", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_status_lifecycle(self, client: AsyncClient, seeded):
        created = await client.post(
            "/billing/invoices/linked",
            json=_linked_payload(seeded, [e.id for e in seeded["entries"]]),
        )
        invoice_id = created.json()["invoice_id"]

        rejected = await client.patch(f"/billing/invoices/{invoice_id}/status", json={"status": "paid"})
        assert rejected.status_code == 409
        assert rejected.json()["error"]["code"] == "INVALID_TRANSITION"

        issued = await client.patch(f"/billing/invoices/{invoice_id}/status", json={"status": "issued"})
        assert issued.status_code == 200
        assert issued.json()["status"] == "issued"

        paid = await client.patch(f"/billing/invoices/{invoice_id}/status", json={"status": "paid"})
        assert paid.status_code == 200
        assert paid.json()["paid_at"] is not None

        unknown = await client.patch(f"/billing/invoices/{invoice_id}/status", json={"status": "lost"})
        assert unknown.status_code == 400
        assert unknown.json()["error"]["code"] == "INVALID_STATUS"

    @pytest.mark.asyncio
    async def test_delete_invoice(self, client: AsyncClient, seeded):
        entry_ids = [e.id for e in seeded["entries"]]
        client_id = seeded["client"].id
        created = await client.post("/billing/invoices/linked", json=_linked_payload(seeded, entry_ids))
        invoice_id = created.json()["invoice_id"]

        response = await client.delete(f"/billing/invoices/{invoice_id}")
        assert response.status_code == 204

        again = await client.delete(f"/billing/invoices/{invoice_id}")
        assert again.status_code == 404
        assert again.json()["error"]["code"] == "INVOICE_NOT_FOUND"

        unbilled = await client.get("/billing/entries/unbilled", params={"client_id": client_id})
        assert len(unbilled.json()) == 3

    @pytest.mark.asyncio
    async def test_standalone_invoice_and_payment_info(self, client: AsyncClient):
        payload = {
            "user_id": "user_123",
            "client_name": "Jan Novák",
            "items": [{"description": "Licence", "quantity": "1", "unit_price": "3630"}],
            "issue_date": "2025-03-05",
            "bank_account": "19-2000145399/0800",
        }

        created = await client.post("/billing/invoices/standalone", json=payload)
        assert created.status_code == 201
        data = created.json()
        assert data["invoice_type"] == "standalone"
        assert data["tax_line"] is None

        payment = await client.get(f"/billing/invoices/{data['invoice_id']}/payment")
        assert payment.status_code == 200
        assert payment.json()["iban"] == "CZ6508000000192000145399"
        assert payment.json()["spayd"].startswith("SPD*1.0*ACC:CZ6508000000192000145399*AM:3630.00*CC:CZK")

    @pytest.mark.asyncio
    async def test_standalone_requires_client(self, client: AsyncClient):
        payload = {
            "user_id": "user_123",
            "items": [{"description": "Licence", "quantity": "1", "unit_price": "100"}],
            "issue_date": "2025-03-05",
        }

        response = await client.post("/billing/invoices/standalone", json=payload)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_get_and_list_invoices(self, client: AsyncClient, seeded):
        created = await client.post(
            "/billing/invoices/linked",
            json=_linked_payload(seeded, [e.id for e in seeded["entries"]], group_by="entry"),
        )
        invoice_id = created.json()["invoice_id"]

        detail = await client.get(f"/billing/invoices/{invoice_id}")
        assert detail.status_code == 200
        assert [item["sort_order"] for item in detail.json()["items"]] == [0, 1, 2]

        listed = await client.get("/billing/invoices", params={"status": "draft", "user_id": "user_123"})
        assert listed.status_code == 200
        assert [invoice["invoice_id"] for invoice in listed.json()] == [invoice_id]

        missing = await client.get("/billing/invoices/999")
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_stats_count_overdue(self, client: AsyncClient, seeded):
        past = (date.today() - timedelta(days=40)).isoformat()
        created = await client.post(
            "/billing/invoices/linked",
            json=_linked_payload(
                seeded,
                [e.id for e in seeded["entries"]],
                issue_date=past,
                due_date=(date.today() - timedelta(days=10)).isoformat(),
            ),
        )
        invoice_id = created.json()["invoice_id"]
        await client.patch(f"/billing/invoices/{invoice_id}/status", json={"status": "issued"})

        response = await client.get("/billing/invoices/stats", params={"user_id": "user_123"})

        assert response.status_code == 200
        stats = response.json()
        assert stats["total_count"] == 1
        assert stats["overdue_count"] == 1
        assert stats["issued_count"] == 0
        assert Decimal(stats["unpaid_amount"]) == Decimal("3630")
