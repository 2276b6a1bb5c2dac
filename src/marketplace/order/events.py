"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer

from marketplace.domain import marketplace


@marketplace.event(part_of="Order")
class OrderPlaced:
    """A buyer checked out their cart into a new order."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    total_amount = Float(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)
