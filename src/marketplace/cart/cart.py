"""Cart aggregate: the server-side staging area of a buyer's purchase.

One cart per user, holding at most one line per product. Adding or
re-quantifying a line is checked against the product's stock at the time of
the change; order placement checks stock again.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier, Integer

from marketplace.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated
from marketplace.domain import marketplace
from marketplace.exceptions import InsufficientStockError, NotFoundError


# HasMany loads children with the entity limit; -1 means unbounded
@marketplace.entity(part_of="Cart", limit=-1)
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@marketplace.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def open_for(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def item_for(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_item(self, product, quantity):
        """Add ``quantity`` of ``product``, topping up an existing line.

        The resulting line quantity may not exceed the product's stock.
        """
        existing = self.item_for(product.id)
        line_quantity = quantity + (existing.quantity if existing else 0)
        if line_quantity > product.stock:
            raise InsufficientStockError(
                product_id=product.id,
                product_name=product.name,
                available=product.stock,
                requested=line_quantity,
            )

        now = datetime.now(UTC)
        if existing:
            existing.quantity = line_quantity
        else:
            self.add_items(CartItem(product_id=str(product.id), quantity=quantity, added_at=now))
        self.updated_at = now

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product.id),
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def update_item_quantity(self, product, quantity):
        """Set the line for ``product`` to ``quantity`` (must be positive)."""
        product.ensure_available(quantity)

        item = self.item_for(product.id)
        if item is None:
            raise NotFoundError("Item not found in cart", product_id=str(product.id))

        previous_quantity = item.quantity
        item.quantity = quantity
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, product_id):
        item = self.item_for(product_id)
        if item is None:
            raise NotFoundError("Item not found in cart to remove", product_id=str(product_id))

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def clear(self):
        """Remove every line. Clearing an empty cart changes nothing."""
        if not self.items:
            return

        item_count = len(self.items)
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), item_count=item_count))

    @property
    def is_empty(self) -> bool:
        return not self.items
