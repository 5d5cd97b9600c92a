import logging

from common.decimal_utils import ZERO, lenient_decimal, parse_decimal
from common.exceptions import NotFoundError, ValidationError
from common.validation import check_choice, parse_int, raise_if_errors, require
from bnpl.bnpl_limit import LIMIT_TYPES

logger = logging.getLogger(__name__)


def check_limits(total_limit, used_limit):
    if total_limit < ZERO or used_limit < ZERO:
        raise ValidationError("BNPL limits cannot be negative")
    if used_limit > total_limit:
        raise ValidationError(
            f"Used limit {used_limit} exceeds total limit {total_limit}",
            errors={"used_limit": "cannot exceed total_limit"},
        )


def available_limit(bnpl_limit):
    return lenient_decimal(bnpl_limit.get("total_limit")) - lenient_decimal(bnpl_limit.get("used_limit"))


def with_available(bnpl_limit):
    return {**bnpl_limit, "available_limit": available_limit(bnpl_limit)}


class BnplService:
    """Buy-now-pay-later credit limits per party. used_limit never exceeds total_limit."""

    def __init__(self, store):
        self.store = store

    def _get_owned(self, limit_id, user_id):
        bnpl_limit = self.store.get_bnpl_limit(limit_id)
        if not bnpl_limit or bnpl_limit.get("user_id") != user_id:
            raise NotFoundError("BNPL Limit", limit_id)
        return bnpl_limit

    def create_limit(self, user_id, data):
        errors = {}
        require(data, ("party_id", "limit_type", "total_limit"), errors)
        raise_if_errors(errors, "BNPL limit")

        party_id = parse_int(data["party_id"], "party_id", errors)
        limit_type = check_choice(data["limit_type"], "limit_type", LIMIT_TYPES, errors)
        raise_if_errors(errors, "BNPL limit")

        party = self.store.get_party(party_id)
        if not party or party.get("user_id") != user_id:
            raise ValidationError(f"Party {party_id} not found", errors={"party_id": "not found"})

        total_limit = lenient_decimal(data.get("total_limit"))
        used_limit = lenient_decimal(data.get("used_limit"))
        check_limits(total_limit, used_limit)

        return self.store.create_bnpl_limit({
            "user_id": user_id,
            "party_id": party_id,
            "limit_type": limit_type,
            "total_limit": total_limit,
            "used_limit": used_limit,
        })

    def list_limits(self, user_id, party_id=None, limit_type=None):
        if party_id is not None:
            limits = [lim for lim in self.store.get_bnpl_limits_by_party_id(party_id) if lim.get("user_id") == user_id]
        elif limit_type:
            limits = self.store.get_bnpl_limits_by_type(user_id, limit_type)
        else:
            limits = self.store.get_bnpl_limits_by_user_id(user_id)
        return [with_available(lim) for lim in limits]

    def update_limit(self, limit_id, data, user_id):
        current = self._get_owned(limit_id, user_id)
        changes = {}
        for field in ("total_limit", "used_limit"):
            if field in data:
                changes[field] = lenient_decimal(data[field])
        if "limit_type" in data:
            errors = {}
            changes["limit_type"] = check_choice(data["limit_type"], "limit_type", LIMIT_TYPES, errors)
            raise_if_errors(errors, "BNPL limit")

        merged = {**current, **changes}
        check_limits(lenient_decimal(merged["total_limit"]), lenient_decimal(merged["used_limit"]))
        return with_available(self.store.update_bnpl_limit(limit_id, changes))

    def _amount(self, amount):
        value = parse_decimal(amount)
        if value is None or value <= ZERO:
            raise ValidationError("amount must be greater than zero", errors={"amount": "must be positive"})
        return value

    def utilize(self, limit_id, amount, user_id):
        """Draw ``amount`` against the limit; refuses to go over the total."""
        bnpl_limit = self._get_owned(limit_id, user_id)
        value = self._amount(amount)
        if value > available_limit(bnpl_limit):
            raise ValidationError(
                f"Insufficient BNPL limit: requested {value}, available {available_limit(bnpl_limit)}"
            )
        used = lenient_decimal(bnpl_limit.get("used_limit")) + value
        logger.info("BNPL limit %s utilized %s", limit_id, value)
        return with_available(self.store.update_bnpl_limit(limit_id, {"used_limit": used}))

    def release(self, limit_id, amount, user_id):
        bnpl_limit = self._get_owned(limit_id, user_id)
        value = self._amount(amount)
        used = lenient_decimal(bnpl_limit.get("used_limit")) - value
        if used < ZERO:
            used = ZERO
        logger.info("BNPL limit %s released %s", limit_id, value)
        return with_available(self.store.update_bnpl_limit(limit_id, {"used_limit": used}))
