"""Product aggregate: a second-hand item listed by a seller.

Only the owning seller may change or delist a product. Stock is taken by
order placement through ``withdraw_stock``, which never lets it go negative.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.exceptions import ForbiddenError, InsufficientStockError
from marketplace.product.events import ProductDetailsUpdated, ProductListed, StockWithdrawn

# Fields a seller may change through an update
EDITABLE_FIELDS = ("name", "description", "price", "category", "condition", "stock")


def serialize_images(images):
    if images is None:
        return json.dumps([])
    if isinstance(images, str):
        return json.dumps([images])
    return json.dumps([str(url) for url in images])


@marketplace.aggregate
class Product:
    name = String(required=True, max_length=255)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=100)
    condition = String(required=True, max_length=50)  # e.g. Like New, Excellent, Good
    stock = Integer(required=True, min_value=0)
    images = Text()  # JSON array of image URLs
    seller_id = Identifier(required=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def list_for_sale(cls, seller_id, name, description, price, category, condition, stock, images=None):
        now = datetime.now(UTC)
        product = cls(
            seller_id=seller_id,
            name=name,
            description=description,
            price=price,
            category=category,
            condition=condition,
            stock=stock,
            images=serialize_images(images),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductListed(
                product_id=str(product.id),
                seller_id=str(seller_id),
                name=product.name,
                price=product.price,
                stock=product.stock,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    def is_owned_by(self, user_id) -> bool:
        return str(self.seller_id) == str(user_id)

    def ensure_owned_by(self, user_id, action="update"):
        if not self.is_owned_by(user_id):
            raise ForbiddenError(f"Forbidden: You can only {action} your own products.")

    # -------------------------------------------------------------------
    # Seller changes
    # -------------------------------------------------------------------
    def update_details(self, images=None, **changes):
        """Apply the non-``None`` values in ``changes``. Images stay as they are unless given."""
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({field: ["Field cannot be updated"] for field in sorted(unknown)})

        for field, value in changes.items():
            if value is not None:
                setattr(self, field, value)
        if images is not None:
            self.images = serialize_images(images)

        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDetailsUpdated(product_id=str(self.id), seller_id=str(self.seller_id)))

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def ensure_available(self, quantity):
        if self.stock < quantity:
            raise InsufficientStockError(
                product_id=self.id,
                product_name=self.name,
                available=self.stock,
                requested=quantity,
            )

    def withdraw_stock(self, quantity, order_id=None):
        self.ensure_available(quantity)
        self.stock -= quantity
        self.updated_at = datetime.now(UTC)
        self.raise_(
            StockWithdrawn(
                product_id=str(self.id),
                order_id=order_id,
                quantity=quantity,
                remaining=self.stock,
            )
        )
