# ================================
# BILLING TESTS (test_billing.py)
# ================================

import uuid
from datetime import date, timedelta

import pytest

from societyhub.services.billing_service import next_sequence_number


NEXT_MONTH = (date.today() + timedelta(days=30)).isoformat()


def invoice_payload(user_id, **overrides):
    payload = {
        "user_id": str(user_id),
        "unit": "A-101",
        "due_date": NEXT_MONTH,
        "maintenance_charge": 2000,
        "parking_charge": 500,
        "water_charge": 300,
        "common_area_charge": 200,
        "gst": 18,
    }
    payload.update(overrides)
    return payload


EXPENSE = {
    "category": "Utilities",
    "description": "Common area electricity",
    "amount": 1200,
    "vendor": "City Power Ltd",
    "date": date.today().isoformat(),
    "payment_method": "bank_transfer",
}


@pytest.fixture
def invoice(client, resident, committee_headers):
    response = client.post("/api/billing/invoices", json=invoice_payload(resident.id), headers=committee_headers)
    assert response.status_code == 201
    return response.json()["invoice"]


class TestSequenceNumbers:

    def test_first_number(self):
        assert next_sequence_number([], "INV") == "INV-00001"

    def test_uses_highest_suffix_after_gaps(self):
        assert next_sequence_number(["INV-00001", "INV-00007", "INV-00003"], "INV") == "INV-00008"

    def test_ignores_foreign_prefixes(self):
        assert next_sequence_number(["EXP-00009", "INV-00002"], "INV") == "INV-00003"


class TestInvoices:

    def test_create_computes_totals_and_copies_resident(self, invoice, resident, committee):
        assert invoice["invoice_number"] == "INV-00001"
        assert invoice["resident_name"] == "Riya Resident"
        assert invoice["resident_email"] == "riya@greenvalley.org"
        assert invoice["subtotal"] == 3000
        assert invoice["gst_amount"] == 540
        assert invoice["total_amount"] == 3540
        assert invoice["status"] == "pending"
        assert invoice["created_by_id"] == str(committee.id)

    def test_numbers_stay_unique_after_delete(self, client, invoice, resident, admin_headers):
        second = client.post("/api/billing/invoices", json=invoice_payload(resident.id), headers=admin_headers).json()["invoice"]
        assert second["invoice_number"] == "INV-00002"

        client.delete(f"/api/billing/invoices/{invoice['id']}", headers=admin_headers)

        third = client.post("/api/billing/invoices", json=invoice_payload(resident.id), headers=admin_headers).json()["invoice"]
        assert third["invoice_number"] == "INV-00003"

    def test_unknown_user(self, client, admin_headers):
        response = client.post("/api/billing/invoices", json=invoice_payload(uuid.uuid4()), headers=admin_headers)
        assert response.status_code == 404

    def test_past_due_date_becomes_overdue(self, client, resident, admin_headers):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        response = client.post(
            "/api/billing/invoices",
            json=invoice_payload(resident.id, due_date=yesterday),
            headers=admin_headers
        )
        assert response.json()["invoice"]["status"] == "overdue"

    def test_update_recomputes_totals(self, client, invoice, admin_headers):
        response = client.patch(
            f"/api/billing/invoices/{invoice['id']}",
            json={"parking_charge": 0, "gst": 0},
            headers=admin_headers
        )

        body = response.json()["invoice"]
        assert body["subtotal"] == 2500
        assert body["gst_amount"] == 0
        assert body["total_amount"] == 2500

    def test_residents_only_see_their_own(self, client, invoice, other_resident, admin_headers,
                                           resident_headers, other_resident_headers):
        client.post("/api/billing/invoices", json=invoice_payload(other_resident.id), headers=admin_headers)

        assert client.get("/api/billing/invoices", headers=resident_headers).json()["count"] == 1
        assert client.get("/api/billing/invoices", headers=admin_headers).json()["count"] == 2

        assert client.get(f"/api/billing/invoices/{invoice['id']}", headers=resident_headers).status_code == 200
        assert client.get(f"/api/billing/invoices/{invoice['id']}", headers=other_resident_headers).status_code == 403

    def test_staff_only_see_invoices_billed_to_them(self, client, invoice, staff, admin_headers, staff_headers):
        client.post("/api/billing/invoices", json=invoice_payload(staff.id), headers=admin_headers)

        listing = client.get("/api/billing/invoices", headers=staff_headers).json()

        assert listing["count"] == 1
        assert listing["invoices"][0]["user_id"] == str(staff.id)
        assert client.get(f"/api/billing/invoices/{invoice['id']}", headers=staff_headers).status_code == 403

    def test_residents_cannot_create(self, client, resident, resident_headers):
        response = client.post("/api/billing/invoices", json=invoice_payload(resident.id), headers=resident_headers)
        assert response.status_code == 403

    def test_mark_paid_defaults_to_other(self, client, invoice, committee_headers):
        response = client.patch(f"/api/billing/invoices/{invoice['id']}/mark-paid", headers=committee_headers)

        assert response.status_code == 200
        body = response.json()["invoice"]
        assert body["status"] == "paid"
        assert body["payment_method"] == "other"
        assert body["paid_date"] is not None

    def test_mark_paid_twice_rejected(self, client, invoice, committee_headers):
        url = f"/api/billing/invoices/{invoice['id']}/mark-paid"
        client.patch(url, json={"payment_method": "upi"}, headers=committee_headers)

        response = client.patch(url, json={"payment_method": "upi"}, headers=committee_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Invoice is already paid"

    def test_delete_is_admin_only(self, client, invoice, committee_headers):
        response = client.delete(f"/api/billing/invoices/{invoice['id']}", headers=committee_headers)
        assert response.status_code == 403


class TestExpenses:

    def test_create_expense(self, client, committee, committee_headers):
        response = client.post("/api/billing/expenses", json=EXPENSE, headers=committee_headers)

        assert response.status_code == 201
        expense = response.json()["expense"]
        assert expense["expense_number"] == "EXP-00001"
        assert expense["status"] == "approved"
        assert expense["approved_by_id"] == str(committee.id)
        assert expense["created_by_id"] == str(committee.id)

    def test_negative_amount_rejected(self, client, admin_headers):
        response = client.post("/api/billing/expenses", json={**EXPENSE, "amount": -5}, headers=admin_headers)
        assert response.status_code == 422

    def test_list_filters_and_order(self, client, admin_headers, resident_headers):
        last_week = (date.today() - timedelta(days=7)).isoformat()
        client.post("/api/billing/expenses", json={**EXPENSE, "date": last_week}, headers=admin_headers)
        client.post("/api/billing/expenses", json={**EXPENSE, "category": "Security", "vendor": "SafeGuard"}, headers=admin_headers)

        listing = client.get("/api/billing/expenses", headers=resident_headers).json()
        assert listing["count"] == 2
        assert listing["expenses"][0]["vendor"] == "SafeGuard"

        security = client.get("/api/billing/expenses?category=Security", headers=resident_headers).json()
        assert security["count"] == 1

        recent = client.get(f"/api/billing/expenses?start_date={date.today().isoformat()}", headers=resident_headers).json()
        assert recent["count"] == 1

    def test_update_and_delete(self, client, admin_headers):
        expense = client.post("/api/billing/expenses", json=EXPENSE, headers=admin_headers).json()["expense"]

        updated = client.patch(
            f"/api/billing/expenses/{expense['id']}",
            json={"amount": 1500, "notes": "Revised bill"},
            headers=admin_headers
        ).json()["expense"]
        assert updated["amount"] == 1500
        assert updated["notes"] == "Revised bill"
        assert updated["expense_number"] == "EXP-00001"

        assert client.delete(f"/api/billing/expenses/{expense['id']}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/billing/expenses/{expense['id']}", headers=admin_headers).status_code == 404


class TestBillingStats:

    def test_stats(self, client, resident, other_resident, admin_headers, resident_headers):
        paid = client.post("/api/billing/invoices", json=invoice_payload(resident.id), headers=admin_headers).json()["invoice"]
        client.post(
            "/api/billing/invoices",
            json=invoice_payload(other_resident.id, gst=0, parking_charge=0, water_charge=0, common_area_charge=0),
            headers=admin_headers
        )
        client.patch(f"/api/billing/invoices/{paid['id']}/mark-paid", json={"payment_method": "upi"}, headers=admin_headers)
        client.post("/api/billing/expenses", json=EXPENSE, headers=admin_headers)
        pending_expense = client.post("/api/billing/expenses", json={**EXPENSE, "amount": 999}, headers=admin_headers).json()["expense"]
        client.patch(f"/api/billing/expenses/{pending_expense['id']}", json={"status": "pending"}, headers=admin_headers)

        stats = client.get("/api/billing/invoices/stats", headers=resident_headers).json()["stats"]

        assert stats["total_revenue"] == 3540
        assert stats["total_pending"] == 2000
        assert stats["total_expenses"] == 1200
        assert stats["net_balance"] == 2340
        assert stats["collection_rate"] == round(3540 / 5540 * 100, 2)
        assert stats["paid_invoice_count"] == 1
        assert stats["pending_invoice_count"] == 1
        assert stats["expense_count"] == 1

    def test_empty_stats(self, client, admin_headers):
        stats = client.get("/api/billing/invoices/stats", headers=admin_headers).json()["stats"]

        assert stats["total_revenue"] == 0
        assert stats["collection_rate"] == 0
