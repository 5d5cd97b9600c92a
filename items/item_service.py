from common.decimal_utils import lenient_decimal
from common.exceptions import NotFoundError
from common.validation import parse_bool, raise_if_errors, require
from items.item import LISTING_FIELDS

ITEM_FIELDS = (
    "name", "hsn_code", "unit", "category", "description", "selling_price",
    "purchase_price", "opening_stock", "min_stock_level",
) + LISTING_FIELDS

DECIMAL_FIELDS = (
    "selling_price", "purchase_price", "opening_stock", "min_stock_level", "mrp", "discount_percentage",
)
BOOL_FIELDS = ("is_listed", "featured_product")


def clean_item(data, partial=False, fields=ITEM_FIELDS):
    errors = {}
    if not partial:
        require(data, ("name",), errors)
    raise_if_errors(errors, "item")

    cleaned = {}
    for field in fields:
        if field not in data:
            continue
        value = data[field]
        if field in DECIMAL_FIELDS:
            cleaned[field] = lenient_decimal(value) if value not in (None, "") else None
        elif field in BOOL_FIELDS:
            cleaned[field] = parse_bool(value)
        else:
            cleaned[field] = value

    if not partial:
        for field in ("selling_price", "purchase_price"):
            if cleaned.get(field) is None:
                cleaned[field] = lenient_decimal(None)
        cleaned.setdefault("is_listed", False)
        cleaned.setdefault("featured_product", False)
    return cleaned


class ItemService:
    def __init__(self, store):
        self.store = store

    def create_item(self, user_id, data):
        item = clean_item(data)
        item["user_id"] = user_id
        return self.store.create_item(item)

    def list_items(self, user_id, listed_only=False):
        if listed_only:
            return self.store.get_items_with_listings(user_id)
        return self.store.get_items_by_user_id(user_id)

    def featured_items(self, limit=10):
        return self.store.get_feature_products(limit)

    def get_item(self, item_id, user_id):
        item = self.store.get_item(item_id)
        if not item or item.get("user_id") != user_id:
            raise NotFoundError("Item", item_id)
        return item

    def update_item(self, item_id, data, user_id):
        self.get_item(item_id, user_id)
        return self.store.update_item(item_id, clean_item(data, partial=True))

    def update_listing(self, item_id, data, user_id):
        self.get_item(item_id, user_id)
        return self.store.update_item_listing(item_id, clean_item(data, partial=True, fields=LISTING_FIELDS))
