from decimal import Decimal

from transactions.totals import SAME_STATE_SENTINEL, calculate_tax_breakup, calculate_totals

INTER_STATE = {"state": "Maharashtra"}
INTRA_STATE = {"state": SAME_STATE_SENTINEL}


def test_single_inter_state_item_goes_to_igst():
    items = [{"amount": 45000, "tax_rate": 5, "tax_amount": 2250}]

    totals = calculate_totals(items, INTER_STATE)

    assert totals["subtotal"] == Decimal("45000")
    assert totals["total_tax"] == Decimal("2250")
    assert totals["grand_total"] == Decimal("47250")
    assert totals["tax_breakup"] == [{
        "rate": Decimal("5"),
        "taxable_amount": Decimal("45000"),
        "igst": Decimal("2250"),
        "cgst": Decimal("0"),
        "sgst": Decimal("0"),
        "total": Decimal("2250"),
    }]


def test_intra_state_splits_tax_evenly_between_cgst_and_sgst():
    items = [
        {"amount": "1000", "tax_rate": "18", "tax_amount": "180"},
        {"amount": "500", "tax_rate": "18", "tax_amount": "91"},
    ]

    [group] = calculate_tax_breakup(items, INTRA_STATE)

    assert group["taxable_amount"] == Decimal("1500")
    assert group["igst"] == 0
    assert group["cgst"] == group["sgst"] == Decimal("135.5")
    assert group["igst"] + group["cgst"] + group["sgst"] == group["total"] == Decimal("271")


def test_groups_follow_first_seen_rate_order():
    items = [
        {"amount": 100, "tax_rate": 12, "tax_amount": 12},
        {"amount": 200, "tax_rate": 5, "tax_amount": 10},
        {"amount": 300, "tax_rate": "12.00", "tax_amount": 36},
    ]

    breakup = calculate_tax_breakup(items, INTER_STATE)

    assert [g["rate"] for g in breakup] == [Decimal("12"), Decimal("5")]
    assert breakup[0]["taxable_amount"] == Decimal("400")
    assert breakup[0]["total"] == Decimal("48")


def test_missing_party_is_treated_as_inter_state():
    [group] = calculate_tax_breakup([{"amount": 10, "tax_rate": 5, "tax_amount": 1}], None)
    assert group["igst"] == Decimal("1")


def test_party_state_equal_to_seller_state_is_still_igst():
    # Only the sentinel string selects CGST/SGST
    [group] = calculate_tax_breakup([{"amount": 10, "tax_rate": 5, "tax_amount": 1}], {"state": "Karnataka"})
    assert group["igst"] == Decimal("1")
    assert group["cgst"] == 0


def test_empty_items_produce_zero_totals_and_no_groups():
    totals = calculate_totals([], INTER_STATE)
    assert totals["subtotal"] == totals["total_tax"] == totals["grand_total"] == 0
    assert totals["tax_breakup"] == []


def test_malformed_numbers_count_as_zero():
    items = [
        {"amount": "abc", "tax_rate": None, "tax_amount": ""},
        {"amount": "100", "tax_amount": "5"},
    ]

    totals = calculate_totals(items, INTER_STATE)

    assert totals["subtotal"] == Decimal("100")
    assert totals["total_tax"] == Decimal("5")
    assert totals["grand_total"] == totals["subtotal"] + totals["total_tax"]
    assert [g["rate"] for g in totals["tax_breakup"]] == [Decimal("0")]
