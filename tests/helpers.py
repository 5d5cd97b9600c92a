from datetime import datetime, timedelta


def seed_owner(store, state="Maharashtra"):
    """A user with a customer, a vendor and one item. Returns (user, customer, vendor, item)."""
    user = store.create_user({"username": "demo", "company_name": "Trivedi & Sons", "state": "Maharashtra"})
    customer = store.create_party({
        "user_id": user["id"], "name": "GlobalTech Solutions", "type": "customer", "state": state,
    })
    vendor = store.create_party({
        "user_id": user["id"], "name": "Bharath Electronics Ltd", "type": "vendor", "state": "Karnataka",
    })
    item = store.create_item({
        "user_id": user["id"], "name": "Laptop", "hsn_code": "8471",
        "selling_price": 45000, "purchase_price": 38000, "is_listed": True, "featured_product": True,
    })
    return user, customer, vendor, item


def transaction_payload(party_id, /, number="INV-2023-042", transaction_type="sales_invoice", **overrides):
    payload = {
        "transaction_number": number,
        "transaction_type": transaction_type,
        "transaction_date": datetime.utcnow().strftime("%Y-%m-%d"),
        "party_id": party_id,
        "due_date": (datetime.utcnow() + timedelta(days=30)).strftime("%Y-%m-%d"),
        "amount": "1",
        "reference": "PO-GT-2023-125",
    }
    payload.update(overrides)
    return payload


def line(item_id, quantity="1", rate="45000", tax_rate="5", **overrides):
    data = {"item_id": item_id, "quantity": quantity, "rate": rate, "tax_rate": tax_rate}
    data.update(overrides)
    return data
