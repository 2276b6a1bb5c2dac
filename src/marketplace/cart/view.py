"""Read side of the cart: lines joined with live catalogue data."""

from protean.utils.globals import current_domain

from marketplace.cart.cart import Cart
from marketplace.product.product import Product


def cart_details(cart: Cart) -> dict:
    """Cart lines priced at the products' **current** prices.

    Lines whose product has since been removed from the catalogue are left out.
    """
    products = current_domain.repository_for(Product)

    items = []
    for item in cart.items:
        product = products.find(item.product_id)
        if product is None:
            continue
        items.append(
            {
                "id": str(item.id),
                "product_id": str(product.id),
                "name": product.name,
                "price": product.price,
                "images": product.image_urls,
                "condition": product.condition,
                "stock": product.stock,
                "quantity": item.quantity,
            }
        )

    total_price = round(sum(line["price"] * line["quantity"] for line in items), 2)
    return {"cart_id": str(cart.id), "items": items, "total_price": total_price}
