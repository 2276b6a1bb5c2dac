"""Order aggregate: the record of a completed checkout.

Each line snapshots the product's name and price at the moment of purchase,
so later catalogue changes never alter a placed order. The order total always
equals the sum of its lines.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from marketplace.domain import marketplace
from marketplace.order.events import OrderPlaced


class OrderStatus(Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


def line_total(quantity, price) -> float:
    return round(quantity * price, 2)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@marketplace.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships to, captured at checkout.

    All parts are required; the address never changes after placement.
    """

    full_name = String(required=True, max_length=100)
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
# HasMany loads children with the entity limit; -1 means unbounded
@marketplace.entity(part_of="Order", limit=-1)
class OrderItem:
    """One purchased product with its price at the time of purchase."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    price_at_purchase = Float(required=True, min_value=0.0)

    @property
    def subtotal(self) -> float:
        return line_total(self.quantity, self.price_at_purchase)


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@marketplace.aggregate
class Order:
    user_id = Identifier(required=True)
    shipping_address = ValueObject(ShippingAddress, required=True)
    items = HasMany(OrderItem)
    total_amount = Float(required=True, min_value=0.0)
    status = String(max_length=20, choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def total_must_match_items(self):
        if not self.items or self.total_amount is None:
            return
        expected = round(sum(item.subtotal for item in self.items), 2)
        if abs(expected - self.total_amount) > 0.005:
            raise ValidationError({"total_amount": [f"Order total {self.total_amount} does not match items {expected}"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, shipping_address, lines):
        """Create an order from ``lines`` of product_id/product_name/quantity/price_at_purchase."""
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        items = [
            OrderItem(
                product_id=str(line["product_id"]),
                product_name=line["product_name"],
                quantity=line["quantity"],
                price_at_purchase=line["price_at_purchase"],
            )
            for line in lines
        ]
        total_amount = round(sum(item.subtotal for item in items), 2)

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            shipping_address=shipping_address,
            items=items,
            total_amount=total_amount,
            status=OrderStatus.PROCESSING.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                total_amount=total_amount,
                item_count=len(items),
                placed_at=now,
            )
        )
        return order

    def is_owned_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)
