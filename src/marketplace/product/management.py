"""Product management by sellers: commands and handler.

Every command names the acting user; the handler enforces that the actor is
a seller and, for existing products, that they own it.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.product.product import Product
from marketplace.user.user import User
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Product")
class CreateProduct:
    seller_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=100)
    condition = String(required=True, max_length=50)
    stock = Integer(required=True, min_value=0)
    images = Text()  # JSON array of image URLs


@marketplace.command(part_of="Product")
class UpdateProduct:
    """Change a product's details. Omitted fields keep their current value."""

    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price = Float(min_value=0.0)
    category = String(max_length=100)
    condition = String(max_length=50)
    stock = Integer(min_value=0)
    images = Text()  # JSON array of image URLs


@marketplace.command(part_of="Product")
class DeleteProduct:
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)


def _image_list(payload):
    return json.loads(payload) if payload else None


def _acting_seller(user_id, action):
    user = current_domain.repository_for(User).get(user_id)
    user.ensure_seller(action)
    return user


@marketplace.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        _acting_seller(command.seller_id, "create products")

        product = Product.list_for_sale(
            seller_id=command.seller_id,
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            condition=command.condition,
            stock=command.stock,
            images=_image_list(command.images),
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        _acting_seller(command.seller_id, "update products")

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.ensure_owned_by(command.seller_id, "update")

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            condition=command.condition,
            stock=command.stock,
            images=_image_list(command.images),
        )
        repo.add(product)
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        _acting_seller(command.seller_id, "delete products")

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.ensure_owned_by(command.seller_id, "delete")

        repo._dao.delete(product)
        logger.info("product_deleted", product_id=str(product.id), seller_id=str(command.seller_id))
