"""End-to-end tests for supplier bills, payments and statements."""

from datetime import date

import pytest

from models import PartyPayment


@pytest.fixture
def add_bill(client, auth_headers):
    def _add(party_name, total_amount, supply_date="2024-01-01", details=None):
        response = client.post("/supply-parties/", json={
            "party_name": party_name,
            "total_amount": total_amount,
            "supply_date": supply_date,
            "details": details,
        }, headers=auth_headers)
        assert response.status_code == 201, response.text
        return response.json()
    return _add


class TestSupplyBills:

    def test_name_is_trimmed_and_required(self, client, auth_headers, add_bill):
        assert add_bill("  Meat Traders ", 1000)["party_name"] == "Meat Traders"
        response = client.post("/supply-parties/", json={"party_name": "  ", "total_amount": 10}, headers=auth_headers)
        assert response.status_code == 400

    def test_aggregate_per_name(self, client, auth_headers, add_bill):
        add_bill("Meat Traders", 1000, "2024-01-01")
        latest = add_bill("Meat Traders", 200, "2024-01-03")
        add_bill("Dairy Farm", 300, "2024-01-02")

        parties = client.get("/supply-parties/", headers=auth_headers).json()
        assert [p["party_name"] for p in parties] == ["Dairy Farm", "Meat Traders"]
        meat = parties[1]
        assert meat["id"] == latest["id"]
        assert meat["supply_date"] == "2024-01-03"
        assert (meat["total_amount"], meat["amount_paid"], meat["pending_amount"]) == (1200.0, 0.0, 1200.0)

        assert client.get("/supply-parties/names", headers=auth_headers).json() == ["Dairy Farm", "Meat Traders"]


class TestPartyTransactions:

    def test_payment_against_one_bill_reduces_supplier_balance(self, client, auth_headers, add_bill):
        first = add_bill("Meat Traders", 1000, "2024-01-01")
        add_bill("Meat Traders", 200, "2024-01-03")

        response = client.post("/supply-parties/transactions", json={
            "type": "Payment", "party_name": "Meat Traders", "amount": 400, "party_id": first["id"],
        }, headers=auth_headers)
        assert response.status_code == 201, response.text
        statement = response.json()
        assert statement["total_amount"] == 1200.0
        assert statement["amount_paid"] == 400.0
        assert statement["pending_amount"] == 800.0
        assert statement["entries"][-1]["balance"] == statement["pending_amount"]

    def test_payment_is_filed_against_latest_bill(self, client, auth_headers, add_bill, db_session):
        add_bill("Meat Traders", 1000, "2024-01-01")
        latest = add_bill("Meat Traders", 200, "2024-01-03")
        client.post("/supply-parties/transactions", json={
            "type": "Payment", "party_name": "Meat Traders", "amount": 100, "note": "cash",
        }, headers=auth_headers)
        payment = db_session.query(PartyPayment).one()
        assert payment.party_id == latest["id"]
        assert payment.note == "cash"

    def test_payment_above_pending_is_rejected(self, client, auth_headers, add_bill, db_session):
        add_bill("Meat Traders", 500)
        response = client.post("/supply-parties/transactions", json={
            "type": "Payment", "party_name": "Meat Traders", "amount": "500.01",
        }, headers=auth_headers)
        assert response.status_code == 400
        assert "pending balance of PKR 500.00" in response.json()["detail"]
        assert db_session.query(PartyPayment).count() == 0

    def test_bill_of_another_party_is_rejected(self, client, auth_headers, add_bill):
        add_bill("Meat Traders", 500)
        other = add_bill("Dairy Farm", 500)
        response = client.post("/supply-parties/transactions", json={
            "type": "Payment", "party_name": "Meat Traders", "amount": 10, "party_id": other["id"],
        }, headers=auth_headers)
        assert response.status_code == 400

    def test_charge_adds_a_bill(self, client, auth_headers, add_bill):
        add_bill("Meat Traders", 500)
        response = client.post("/supply-parties/transactions", json={
            "type": "Charge", "party_name": "Meat Traders", "amount": 250, "note": "Extra chicken",
        }, headers=auth_headers)
        statement = response.json()
        assert statement["total_amount"] == 750.0
        assert statement["entries"][-1]["description"].endswith("Extra chicken")
        assert statement["entries"][-1]["debit"] == 250.0

    def test_oversized_charge_is_rejected(self, client, auth_headers, add_bill):
        add_bill("Meat Traders", 500)
        response = client.post("/supply-parties/transactions", json={
            "type": "Charge", "party_name": "Meat Traders", "amount": "100000000",
        }, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Amount is too large."

    def test_unknown_party(self, client, auth_headers):
        response = client.post("/supply-parties/transactions", json={
            "type": "Charge", "party_name": "Nobody", "amount": 10,
        }, headers=auth_headers)
        assert response.status_code == 404


class TestPartyLedger:

    def test_running_balance_in_date_order(self, client, auth_headers, add_bill, db_session):
        first = add_bill("Meat Traders", 1000, "2024-01-01")
        add_bill("Meat Traders", 200, "2024-01-03", details="Mutton")
        db_session.add(PartyPayment(party_id=first["id"], payment_date=date(2024, 1, 2), amount_paid=400))
        db_session.commit()

        statement = client.get("/supply-parties/ledger?party_name=Meat Traders", headers=auth_headers).json()
        assert [e["balance"] for e in statement["entries"]] == [1000.0, 600.0, 800.0]
        assert [e["description"] for e in statement["entries"]] == [
            f"Supply #{first['id']} - Goods/Services",
            f"Payment - Towards Invoice #{first['id']}",
            f"Supply #{first['id'] + 1} - Mutton",
        ]
        assert statement["pending_amount"] == 800.0

    def test_unknown_party(self, client, auth_headers):
        assert client.get("/supply-parties/ledger?party_name=Nobody", headers=auth_headers).status_code == 404
