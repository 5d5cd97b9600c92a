from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from helpers import line, transaction_payload


@pytest.fixture
def headers(client):
    user = client.post("/users/", json={"username": "demo"}).get_json()
    return {"X-User-Id": str(user["id"])}


def _party(client, headers, **overrides):
    data = {"name": "GlobalTech Solutions", "type": "customer", "state": "Maharashtra", "credit_limit": "500000",
            "credit_period": 30}
    data.update(overrides)
    return client.post("/parties/", json=data, headers=headers)


def test_index(client):
    assert client.get("/").get_json() == {"message": "Ledgerly API"}


def test_duplicate_username_is_rejected(client, headers):
    assert client.post("/users/", json={"username": "demo"}).status_code == 400
    assert client.get("/users/1").status_code == 200
    assert client.get("/users/99").status_code == 404


def test_party_crud(client, headers):
    created = _party(client, headers)
    assert created.status_code == 201
    party = created.get_json()
    assert Decimal(party["credit_limit"]) == Decimal("500000")

    _party(client, headers, name="Ashok Suppliers", type="vendor")
    vendors = client.get("/parties/?type=vendor", headers=headers).get_json()
    assert [p["name"] for p in vendors] == ["Ashok Suppliers"]

    updated = client.put(f"/parties/{party['id']}", json={"state": "Same State as User"}, headers=headers)
    assert updated.get_json()["state"] == "Same State as User"
    assert client.get("/parties/404", headers=headers).status_code == 404
    assert _party(client, headers, type="friend").status_code == 400
    assert client.get(f"/parties/{party['id']}/transactions", headers=headers).get_json() == []


def test_item_crud_and_listing(client, headers):
    created = client.post("/items/", json={"name": "Laptop", "selling_price": "45000", "purchase_price": "38000",
                                           "is_listed": True}, headers=headers)
    assert created.status_code == 201
    item = created.get_json()

    listing = client.put(f"/items/{item['id']}/listing",
                         json={"featured_product": True, "brand_name": "TechPro", "selling_price": "1"},
                         headers=headers).get_json()
    assert listing["brand_name"] == "TechPro"
    assert Decimal(listing["selling_price"]) == Decimal("45000")

    assert [i["id"] for i in client.get("/items/listed", headers=headers).get_json()] == [item["id"]]
    assert [i["id"] for i in client.get("/items/featured").get_json()] == [item["id"]]
    assert client.post("/items/", json={"selling_price": "1"}, headers=headers).status_code == 400

    updated = client.put(f"/items/{item['id']}", json={"selling_price": "47000"}, headers=headers).get_json()
    assert Decimal(updated["selling_price"]) == Decimal("47000")


def test_bnpl_routes(client, headers):
    party = _party(client, headers).get_json()
    created = client.post("/bnpl-limits/", json={"party_id": party["id"], "limit_type": "sales",
                                                 "total_limit": "1000"}, headers=headers)
    assert created.status_code == 201
    limit_id = created.get_json()["id"]

    used = client.post(f"/bnpl-limits/{limit_id}/utilize", json={"amount": "300"}, headers=headers).get_json()
    assert Decimal(used["available_limit"]) == Decimal("700")
    over = client.post(f"/bnpl-limits/{limit_id}/utilize", json={"amount": "800"}, headers=headers)
    assert over.status_code == 400

    listed = client.get(f"/bnpl-limits/?party_id={party['id']}", headers=headers).get_json()
    assert len(listed) == 1
    assert client.put("/bnpl-limits/99", json={"total_limit": "1"}, headers=headers).status_code == 404
    assert client.post("/bnpl-limits/", json=[party["id"]], headers=headers).status_code == 400
    assert client.post("/parties/", json="customer", headers=headers).status_code == 400


def test_tally_sync_routes(client, headers):
    assert client.get("/tally-sync/latest", headers=headers).status_code == 404
    client.post("/tally-sync/", json={"sync_type": "parties", "status": "success", "records_synced": 5},
                headers=headers)
    client.post("/tally-sync/", json={"sync_type": "transactions", "status": "failed",
                                      "message": "Tally not reachable"}, headers=headers)

    assert client.get("/tally-sync/latest", headers=headers).get_json()["sync_type"] == "transactions"
    assert len(client.get("/tally-sync/", headers=headers).get_json()) == 2
    assert client.post("/tally-sync/", json={"sync_type": "x", "status": "maybe"}, headers=headers).status_code == 400


def test_ageing_reports_and_dashboard(client, headers):
    customer = _party(client, headers).get_json()
    vendor = _party(client, headers, name="Bharath Electronics Ltd", type="vendor").get_json()
    item = client.post("/items/", json={"name": "Laptop"}, headers=headers).get_json()
    overdue = (datetime.utcnow() - timedelta(days=45)).strftime("%Y-%m-%d")

    client.post("/transactions/", json={
        "transaction": transaction_payload(customer["id"], number="INV-1", due_date=overdue),
        "items": [line(item["id"], rate="18750", tax_rate="0")],
    }, headers=headers)
    client.post("/transactions/", json={
        "transaction": transaction_payload(vendor["id"], number="BILL-1", transaction_type="purchase_bill"),
        "items": [line(item["id"], rate="1000", tax_rate="0")],
    }, headers=headers)

    receivables = client.get("/reports/ageing/receivables", headers=headers).get_json()
    assert Decimal(receivables["buckets"]["days_31_to_60"]) == Decimal("18750")
    assert Decimal(receivables["total"]) == Decimal("18750")

    payables = client.get("/reports/ageing/payables", headers=headers).get_json()
    assert Decimal(payables["buckets"]["current"]) == Decimal("1000")

    dashboard = client.get("/reports/dashboard", headers=headers).get_json()
    assert dashboard["receivables"]["count"] == 1
    assert Decimal(dashboard["payables"]["total"]) == Decimal("1000")
    assert len(dashboard["recent_transactions"]) == 2
    assert dashboard["last_tally_sync"] is None


def test_create_tables_registers_every_model(app):
    from src.create_tables import create_tables
    from src.extensions import db

    create_tables(drop=True)

    assert {"users", "parties", "items", "transactions", "transaction_items", "bnpl_limits",
            "tally_sync_logs"} <= set(db.metadata.tables)
