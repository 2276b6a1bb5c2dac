"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, Integer, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Product")
class ProductListed:
    """A seller put a product up for sale."""

    __version__ = 1

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)


@marketplace.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id = Identifier(required=True)
    seller_id = Identifier(required=True)


@marketplace.event(part_of="Product")
class StockWithdrawn:
    """Stock was taken by a placed order."""

    __version__ = 1

    product_id = Identifier(required=True)
    order_id = Identifier()
    quantity = Integer(required=True)
    remaining = Integer(required=True)
