"""End-to-end tests for orders and order payments."""

from decimal import Decimal

from models import Order, Payment


class TestCreateOrder:

    def test_totals_come_from_menu_prices(self, client, auth_headers, menu, create_order):
        body = create_order([
            {"kind": "catalog", "item_id": menu["Biryani"], "quantity": 2},
            {"kind": "catalog", "item_id": menu["Naan"], "quantity": 4},
        ])
        order = body["order"]
        assert body["order_id"] == order["id"]
        assert order["total_amount"] == 1100.0
        assert order["advance_payment"] == 0.0
        assert order["remaining_amount"] == 1100.0
        assert order["status"] == "Pending"
        assert order["customer_name"] == "Ayesha Khan"
        assert order["delivery_address"] == "House 12, Gulberg"

    def test_full_advance_is_fulfilled_and_logged(self, client, auth_headers, menu, create_order, db_session):
        body = create_order([{"kind": "catalog", "item_id": menu["Biryani"], "quantity": 3}], advance_payment=1500)
        assert body["order"]["status"] == "Fulfilled"
        assert body["order"]["remaining_amount"] == 0.0

        payments = client.get(f"/orders/{body['order_id']}/payments", headers=auth_headers).json()
        assert [(p["amount"], p["notes"]) for p in payments] == [(1500.0, "Advance payment")]
        assert client.get("/orders/pending?search=ayesha", headers=auth_headers).json() == []

    def test_custom_items(self, client, auth_headers, create_order):
        body = create_order([{"kind": "custom", "name": "Birthday cake", "unit_price": "2450.50", "quantity": 1}])
        items = client.get(f"/orders/{body['order_id']}/items", headers=auth_headers).json()
        assert items[0]["custom_item_name"] == "Birthday cake"
        assert items[0]["menu_item_name"] is None
        assert items[0]["line_total"] == 2450.5

    def test_advance_above_total_writes_nothing(self, client, auth_headers, menu, db_session):
        response = client.post("/orders/", json={
            "new_customer": {"name": "Bilal", "phone": "03111111111"},
            "advance_payment": 600,
            "items": [{"kind": "catalog", "item_id": menu["Biryani"], "quantity": 1}],
        }, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Advance payment cannot exceed the total amount."
        assert db_session.query(Order).count() == 0
        assert client.get("/customers/?search=Bilal", headers=auth_headers).json() == []

    def test_total_beyond_column_is_rejected(self, client, auth_headers, db_session):
        response = client.post("/orders/", json={
            "new_customer": {"name": "Bilal", "phone": "03111111111"},
            "items": [{"kind": "custom", "name": "Catering", "unit_price": "99999999.99", "quantity": 2}],
        }, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Line total is too large."
        assert db_session.query(Order).count() == 0

    def test_unknown_menu_item(self, client, auth_headers):
        response = client.post("/orders/", json={
            "new_customer": {"name": "Bilal", "phone": "03111111111"},
            "items": [{"kind": "catalog", "item_id": 999, "quantity": 1}],
        }, headers=auth_headers)
        assert response.status_code == 400

    def test_customer_is_required(self, client, auth_headers, menu):
        response = client.post("/orders/", json={
            "items": [{"kind": "catalog", "item_id": menu["Naan"], "quantity": 1}],
        }, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Please select or add a customer."

    def test_unknown_customer(self, client, auth_headers, menu):
        response = client.post("/orders/", json={
            "customer_id": 42,
            "items": [{"kind": "catalog", "item_id": menu["Naan"], "quantity": 1}],
        }, headers=auth_headers)
        assert response.status_code == 404

    def test_requires_login(self, client, menu):
        response = client.post("/orders/", json={"items": []})
        assert response.status_code == 401


class TestOrderPayments:

    def test_payments_move_status_to_fulfilled(self, client, auth_headers, menu, create_order, db_session):
        order_id = create_order([{"kind": "catalog", "item_id": menu["Karahi"], "quantity": 1}], advance_payment=400)["order_id"]

        response = client.post(f"/orders/{order_id}/payments", json={"amount": 250, "notes": "cash"}, headers=auth_headers)
        assert response.status_code == 201, response.text
        body = response.json()
        assert body["payment"]["amount"] == 250.0
        assert body["updated_order"]["status"] == "Partially_Paid"
        assert body["updated_order"]["remaining_amount"] == 350.0

        response = client.post(f"/orders/{order_id}/payments", json={"amount": 350}, headers=auth_headers)
        assert response.json()["updated_order"]["status"] == "Fulfilled"
        assert response.json()["updated_order"]["remaining_amount"] == 0.0

        logged = sum(p.amount for p in db_session.query(Payment).filter(Payment.order_id == order_id))
        assert Decimal(logged) == Decimal("1000")

    def test_overpayment_is_rejected(self, client, auth_headers, menu, create_order):
        order_id = create_order([{"kind": "catalog", "item_id": menu["Karahi"], "quantity": 1}], advance_payment=400)["order_id"]
        response = client.post(f"/orders/{order_id}/payments", json={"amount": "600.01"}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Payment cannot exceed the remaining balance of PKR 600.00."
        payments = client.get(f"/orders/{order_id}/payments", headers=auth_headers).json()
        assert len(payments) == 1

    def test_non_positive_payment(self, client, auth_headers, menu, create_order):
        order_id = create_order([{"kind": "catalog", "item_id": menu["Naan"], "quantity": 1}])["order_id"]
        response = client.post(f"/orders/{order_id}/payments", json={"amount": 0}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Amount must be positive."

    def test_oversized_payment_is_a_validation_error(self, client, auth_headers, menu, create_order):
        order_id = create_order([{"kind": "catalog", "item_id": menu["Naan"], "quantity": 1}])["order_id"]
        response = client.post(f"/orders/{order_id}/payments", json={"amount": 1e30}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["detail"] == "Amount is too large."

    def test_drifted_order_rolls_the_payment_back(self, client, auth_headers, menu, create_order, db_session):
        order_id = create_order([{"kind": "catalog", "item_id": menu["Karahi"], "quantity": 1}])["order_id"]
        # Cached advance no longer matches the (empty) payment log
        db_order = db_session.query(Order).filter(Order.id == order_id).one()
        db_order.advance_payment = 300
        db_session.commit()

        response = client.post(f"/orders/{order_id}/payments", json={"amount": 100}, headers=auth_headers)
        assert response.status_code == 500
        assert "payments sum to" in response.json()["detail"]
        assert db_session.query(Payment).filter(Payment.order_id == order_id).count() == 0
        db_session.refresh(db_order)
        assert db_order.advance_payment == Decimal("300")

    def test_payment_on_missing_order(self, client, auth_headers):
        response = client.post("/orders/77/payments", json={"amount": 10}, headers=auth_headers)
        assert response.status_code == 404


class TestPendingOrders:

    def test_search_by_name_and_id(self, client, auth_headers, menu, create_order):
        open_id = create_order([{"kind": "catalog", "item_id": menu["Naan"], "quantity": 2}])["order_id"]
        create_order([{"kind": "catalog", "item_id": menu["Naan"], "quantity": 2}], advance_payment=50)

        by_name = client.get("/orders/pending?search=ayesha", headers=auth_headers).json()
        assert [o["id"] for o in by_name] == [open_id]

        by_id = client.get(f"/orders/pending?search={open_id}", headers=auth_headers).json()
        assert [o["id"] for o in by_id] == [open_id]

    def test_empty_search_returns_nothing(self, client, auth_headers, menu, create_order):
        create_order([{"kind": "catalog", "item_id": menu["Naan"], "quantity": 1}])
        assert client.get("/orders/pending?search=", headers=auth_headers).json() == []

    def test_non_ascii_digits_match_names_only(self, client, auth_headers, menu, create_order):
        create_order([{"kind": "catalog", "item_id": menu["Naan"], "quantity": 1}])
        response = client.get("/orders/pending?search=\u00b2", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_order_number_beyond_integer_range(self, client, auth_headers):
        response = client.get("/orders/pending?search=" + "9" * 30, headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == []

    def test_missing_order(self, client, auth_headers):
        assert client.get("/orders/5", headers=auth_headers).status_code == 404
