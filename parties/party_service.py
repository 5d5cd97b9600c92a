from common.decimal_utils import lenient_decimal
from common.exceptions import NotFoundError
from common.validation import check_choice, parse_int, raise_if_errors, require
from parties.party import PARTY_TYPES

PARTY_FIELDS = (
    "name", "type", "gstin", "contact_person", "email", "phone", "address",
    "city", "state", "pincode", "credit_limit", "credit_period",
)


def clean_party(data, partial=False):
    errors = {}
    if not partial:
        require(data, ("name", "type"), errors)

    cleaned = {}
    for field in PARTY_FIELDS:
        if field not in data or field in errors:
            continue
        value = data[field]
        if field == "type":
            cleaned[field] = check_choice(value, field, PARTY_TYPES, errors)
        elif field == "credit_limit":
            cleaned[field] = lenient_decimal(value)
        elif field == "credit_period":
            cleaned[field] = parse_int(value, field, errors) if value not in (None, "") else None
        else:
            cleaned[field] = value

    raise_if_errors(errors, "party")
    return cleaned


class PartyService:
    def __init__(self, store):
        self.store = store

    def create_party(self, user_id, data):
        party = clean_party(data)
        party["user_id"] = user_id
        return self.store.create_party(party)

    def list_parties(self, user_id, party_type=None):
        if party_type:
            return self.store.get_parties_by_type(user_id, party_type)
        return self.store.get_parties_by_user_id(user_id)

    def get_party(self, party_id, user_id):
        party = self.store.get_party(party_id)
        if not party or party.get("user_id") != user_id:
            raise NotFoundError("Party", party_id)
        return party

    def update_party(self, party_id, data, user_id):
        self.get_party(party_id, user_id)
        return self.store.update_party(party_id, clean_party(data, partial=True))

    def get_party_transactions(self, party_id, user_id):
        self.get_party(party_id, user_id)
        return self.store.get_transactions_by_party_id(user_id, party_id)
