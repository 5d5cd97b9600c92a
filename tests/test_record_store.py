from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from common.exceptions import NotFoundError
from helpers import seed_owner


def _txn(store, user, party, number, transaction_type="sales_invoice", status="pending",
         days_overdue=None, balance="100", transaction_date=None):
    now = datetime.utcnow()
    return store.create_transaction({
        "user_id": user["id"],
        "transaction_number": number,
        "transaction_type": transaction_type,
        "transaction_date": transaction_date or now,
        "party_id": party["id"],
        "amount": Decimal(balance),
        "balance_due": Decimal(balance),
        "due_date": now - timedelta(days=days_overdue) if days_overdue is not None else None,
        "status": status,
        "is_bnpl": False,
        "is_sync": False,
    })


def test_create_assigns_id_and_timestamp(store):
    user, customer, _, _ = seed_owner(store)
    assert user["id"] == 1
    assert customer["id"] == 1
    assert isinstance(customer["created_at"], datetime)
    assert store.get_user_by_username("demo")["id"] == user["id"]


def test_party_queries_filter_by_equality(store):
    user, customer, vendor, _ = seed_owner(store)
    assert [p["id"] for p in store.get_parties_by_user_id(user["id"])] == [customer["id"], vendor["id"]]
    assert [p["name"] for p in store.get_parties_by_type(user["id"], "vendor")] == ["Bharath Electronics Ltd"]
    assert store.get_parties_by_user_id(999) == []


def test_update_missing_record_raises_not_found(store):
    with pytest.raises(NotFoundError):
        store.update_transaction(42, {"amount": Decimal("1")})
    with pytest.raises(NotFoundError):
        store.update_party(42, {"name": "x"})


def test_update_merges_fields(store):
    user, customer, _, _ = seed_owner(store)
    txn = _txn(store, user, customer, "INV-1")
    updated = store.update_transaction(txn["id"], {"amount": Decimal("47250"), "balance_due": Decimal("47250")})
    assert updated["amount"] == Decimal("47250")
    assert updated["transaction_number"] == "INV-1"
    assert store.get_transaction(txn["id"])["balance_due"] == Decimal("47250")


def test_item_listing_update_leaves_inventory_fields(store):
    user, _, _, item = seed_owner(store)
    updated = store.update_item_listing(item["id"], {
        "brand_name": "TechPro", "selling_price": Decimal("1"), "mrp": None,
    })
    assert updated["brand_name"] == "TechPro"
    assert updated["selling_price"] == Decimal("45000")
    assert [i["id"] for i in store.get_items_with_listings(user["id"])] == [item["id"]]
    assert [i["id"] for i in store.get_feature_products(limit=5)] == [item["id"]]


def test_transaction_items_belong_to_their_transaction(store):
    user, customer, _, item = seed_owner(store)
    first = _txn(store, user, customer, "INV-1")
    second = _txn(store, user, customer, "INV-2")
    for txn_id in (first["id"], first["id"], second["id"]):
        store.create_transaction_item({
            "transaction_id": txn_id, "item_id": item["id"], "quantity": Decimal("1"), "rate": Decimal("10"),
            "amount": Decimal("10"), "tax_rate": Decimal("5"), "tax_amount": Decimal("0.5"),
            "total_amount": Decimal("10.5"),
        })
    assert len(store.get_transaction_items_by_transaction_id(first["id"])) == 2
    assert len(store.get_transaction_items_by_transaction_id(second["id"])) == 1


def test_delete_transaction_removes_its_items(store):
    user, customer, _, item = seed_owner(store)
    txn = _txn(store, user, customer, "INV-1")
    store.create_transaction_item({
        "transaction_id": txn["id"], "item_id": item["id"], "quantity": Decimal("1"), "rate": Decimal("10"),
    })

    deleted = store.delete_transaction(txn["id"])

    assert deleted["id"] == txn["id"]
    assert store.get_transaction(txn["id"]) is None
    assert store.get_transaction_items_by_transaction_id(txn["id"]) == []
    with pytest.raises(NotFoundError):
        store.delete_transaction(txn["id"])


def test_transaction_lookups(store):
    user, customer, vendor, _ = seed_owner(store)
    now = datetime.utcnow()
    _txn(store, user, customer, "INV-1", transaction_date=now - timedelta(days=3))
    _txn(store, user, vendor, "BILL-1", transaction_type="purchase_bill", transaction_date=now - timedelta(days=1))
    _txn(store, user, customer, "INV-2", status="paid", transaction_date=now - timedelta(days=2))

    assert store.get_transaction_by_number(user["id"], "BILL-1")["party_id"] == vendor["id"]
    assert len(store.get_transactions_by_type(user["id"], "sales_invoice")) == 2
    assert len(store.get_transactions_by_party_id(user["id"], customer["id"])) == 2
    assert [t["transaction_number"] for t in store.get_recent_transactions(user["id"], 2)] == ["BILL-1", "INV-2"]

    listed = store.list_transactions(user["id"], transaction_type="sales_invoice", status="pending")
    assert [t["transaction_number"] for t in listed] == ["INV-1"]

    ranged = store.list_transactions(user["id"], start_date=now - timedelta(days=2, hours=1))
    assert [t["transaction_number"] for t in ranged] == ["BILL-1", "INV-2"]


def test_ageing_and_open_summaries(store):
    user, customer, vendor, _ = seed_owner(store)
    _txn(store, user, customer, "INV-1", days_overdue=45, balance="18750")
    _txn(store, user, customer, "INV-2", days_overdue=-10, balance="100", status="partially_paid")
    _txn(store, user, customer, "INV-3", days_overdue=90, balance="500", status="paid")
    _txn(store, user, customer, "INV-4", balance="70")
    _txn(store, user, vendor, "BILL-1", transaction_type="purchase_bill", days_overdue=5, balance="250")

    receivables = store.get_receivables_ageing(user["id"])
    assert receivables["days_31_to_60"] == Decimal("18750")
    assert receivables["current"] == Decimal("100")
    assert receivables["days_60_plus"] == 0

    payables = store.get_payables_ageing(user["id"])
    assert payables["days_1_to_30"] == Decimal("250")

    assert store.get_open_receivables(user["id"]) == {"total": Decimal("18920"), "count": 3}
    assert store.get_open_payables(user["id"]) == {"total": Decimal("250"), "count": 1}


def test_tally_sync_logs_newest_first(store):
    user, _, _, _ = seed_owner(store)
    assert store.get_recent_tally_sync_log(user["id"]) is None
    store.create_tally_sync_log({"user_id": user["id"], "sync_type": "parties", "status": "success",
                                 "records_synced": 5})
    latest = store.create_tally_sync_log({"user_id": user["id"], "sync_type": "transactions",
                                          "status": "failed", "records_synced": 0, "message": "Tally offline"})
    assert isinstance(latest["synced_at"], datetime)
    assert store.get_recent_tally_sync_log(user["id"])["id"] == latest["id"]
    assert [log["sync_type"] for log in store.get_tally_sync_logs(user["id"])] == ["transactions", "parties"]


def test_bnpl_limit_queries(store):
    user, customer, vendor, _ = seed_owner(store)
    store.create_bnpl_limit({"user_id": user["id"], "party_id": customer["id"], "limit_type": "sales",
                             "total_limit": Decimal("1000"), "used_limit": Decimal("0")})
    store.create_bnpl_limit({"user_id": user["id"], "party_id": vendor["id"], "limit_type": "purchase",
                             "total_limit": Decimal("500"), "used_limit": Decimal("100")})
    assert len(store.get_bnpl_limits_by_user_id(user["id"])) == 2
    assert [lim["party_id"] for lim in store.get_bnpl_limits_by_type(user["id"], "purchase")] == [vendor["id"]]
    assert len(store.get_bnpl_limits_by_party_id(customer["id"])) == 1
    with pytest.raises(NotFoundError):
        store.update_bnpl_limit(99, {"used_limit": Decimal("1")})
