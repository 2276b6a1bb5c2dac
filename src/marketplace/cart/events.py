"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from marketplace.domain import marketplace


@marketplace.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or its existing line was topped up."""

    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@marketplace.event(part_of="Cart")
class CartQuantityUpdated:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@marketplace.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.event(part_of="Cart")
class CartCleared:
    """All items were removed, either by the buyer or by order placement."""

    __version__ = 1

    cart_id = Identifier(required=True)
    item_count = Integer(required=True)
