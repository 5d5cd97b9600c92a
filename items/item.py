from datetime import datetime
from src.extensions import db
from common.record_mixin import RecordMixin

LISTING_FIELDS = (
    "image_url", "is_listed", "listing_description", "listing_category",
    "listing_status", "mrp", "discount_percentage", "featured_product", "brand_name",
)


class Item(RecordMixin, db.Model):
    __tablename__ = "items"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    # Item Name
    name = db.Column(db.String(255), nullable=False)

    # HSN / SAC code
    hsn_code = db.Column(db.String(20), nullable=True)

    # Unit of Measure (Nos, Kg, Litre, etc.)
    unit = db.Column(db.String(50), nullable=True)

    category = db.Column(db.String(100), nullable=True)
    description = db.Column(db.Text, nullable=True)

    selling_price = db.Column(db.Numeric(12, 2), nullable=False, default=0)

    # Purchase Price (Cost Price)
    purchase_price = db.Column(db.Numeric(12, 2), nullable=False, default=0)

    opening_stock = db.Column(db.Numeric(12, 2), default=0)
    min_stock_level = db.Column(db.Numeric(12, 2), nullable=True)

    # Storefront listing
    image_url = db.Column(db.String(500), nullable=True)
    is_listed = db.Column(db.Boolean, default=False, nullable=False)
    listing_description = db.Column(db.Text, nullable=True)
    listing_category = db.Column(db.String(100), nullable=True)
    listing_status = db.Column(db.String(50), nullable=True)
    mrp = db.Column(db.Numeric(12, 2), nullable=True)
    discount_percentage = db.Column(db.Numeric(5, 2), nullable=True)
    featured_product = db.Column(db.Boolean, default=False, nullable=False)
    brand_name = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
