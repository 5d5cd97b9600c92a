from common.decimal_utils import ZERO, lenient_decimal

# Party.state value meaning "registered in the seller's own state".
# Anything else, including a missing party, is billed as inter-state (IGST).
# The party's state is never compared with the seller's registration.
SAME_STATE_SENTINEL = "Same State as User"


def is_inter_state(party):
    return (party or {}).get("state") != SAME_STATE_SENTINEL


def calculate_tax_breakup(items, party=None):
    """
    GST breakup per distinct tax rate, in the order rates first appear.

    Inter-state groups put the whole tax under IGST; intra-state groups
    split it evenly between CGST and SGST.
    """
    groups = {}
    for item in items:
        rate = lenient_decimal(item.get("tax_rate"))
        group = groups.setdefault(rate, {"taxable_amount": ZERO, "total": ZERO})
        group["taxable_amount"] += lenient_decimal(item.get("amount"))
        group["total"] += lenient_decimal(item.get("tax_amount"))

    igst_only = is_inter_state(party)
    breakup = []
    for rate, group in groups.items():
        tax = group["total"]
        breakup.append({
            "rate": rate,
            "taxable_amount": group["taxable_amount"],
            "igst": tax if igst_only else ZERO,
            "cgst": ZERO if igst_only else tax / 2,
            "sgst": ZERO if igst_only else tax / 2,
            "total": tax,
        })
    return breakup


def calculate_totals(items, party=None):
    """
    Totals for one transaction's line items.

    Returns subtotal (pre-tax), total_tax, grand_total and the per-rate
    tax breakup. Missing or non-numeric amounts count as zero.
    """
    subtotal = sum((lenient_decimal(item.get("amount")) for item in items), ZERO)
    total_tax = sum((lenient_decimal(item.get("tax_amount")) for item in items), ZERO)
    return {
        "subtotal": subtotal,
        "total_tax": total_tax,
        "grand_total": subtotal + total_tax,
        "tax_breakup": calculate_tax_breakup(items, party),
    }
