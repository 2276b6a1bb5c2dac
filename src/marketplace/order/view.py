"""Read side of orders: placed orders joined with live product data."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.exceptions import NotFoundError
from marketplace.order.order import Order
from marketplace.product.product import Product


def order_details(order: Order) -> dict:
    """The order with its lines. Name and images come from the catalogue when the
    product still exists; otherwise the name captured at purchase is used."""
    products = current_domain.repository_for(Product)

    items = []
    for item in order.items:
        product = products.find(item.product_id)
        items.append(
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "name": product.name if product else item.product_name,
                "images": product.image_urls if product else [],
                "condition": product.condition if product else None,
                "quantity": item.quantity,
                "price_at_purchase": item.price_at_purchase,
            }
        )

    address = order.shipping_address
    return {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "total_amount": order.total_amount,
        "status": order.status,
        "shipping_address": {
            "full_name": address.full_name,
            "address": address.address,
            "city": address.city,
            "state": address.state,
            "zip_code": address.zip_code,
            "country": address.country,
        },
        "items": items,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


def orders_for_user(user_id) -> list[dict]:
    return [order_details(order) for order in current_domain.repository_for(Order).for_user(user_id)]


def order_for_user(order_id, user_id) -> dict:
    """A single order, visible only to the user who placed it."""
    try:
        order = current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        order = None

    if order is None or not order.is_owned_by(user_id):
        raise NotFoundError("Order not found or access denied")
    return order_details(order)
