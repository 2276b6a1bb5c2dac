"""Read side of the catalogue."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.exceptions import NotFoundError
from marketplace.product.product import Product
from marketplace.user.user import User


def _seller_name(seller_id):
    try:
        return current_domain.repository_for(User).get(str(seller_id)).name
    except ObjectNotFoundError:
        return None


def product_details(product: Product, seller_name=None) -> dict:
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "price": product.price,
        "category": product.category,
        "condition": product.condition,
        "stock": product.stock,
        "images": product.image_urls,
        "seller_id": str(product.seller_id),
        "seller_name": seller_name if seller_name is not None else _seller_name(product.seller_id),
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


def product_by_id(product_id) -> dict:
    product = current_domain.repository_for(Product).find(product_id)
    if product is None:
        raise NotFoundError("Product not found", product_id=str(product_id))
    return product_details(product)


def catalogue(category=None, condition=None) -> list[dict]:
    products = current_domain.repository_for(Product).listing(category=category, condition=condition)
    return [product_details(product) for product in products]


def seller_products(seller_id) -> list[dict]:
    products = current_domain.repository_for(Product).for_seller(seller_id)
    seller_name = _seller_name(seller_id)
    return [product_details(product, seller_name=seller_name) for product in products]
