"""Cart item management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from marketplace.cart.cart import Cart
from marketplace.cart.management import open_cart_for
from marketplace.domain import marketplace
from marketplace.exceptions import NotFoundError
from marketplace.product.product import Product


@marketplace.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@marketplace.command(part_of="Cart")
class UpdateCartQuantity:
    """Set a line's quantity. Zero or less removes the line."""

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@marketplace.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


def _product(product_id, message="Product not found"):
    product = current_domain.repository_for(Product).find(product_id)
    if product is None:
        raise NotFoundError(message, product_id=str(product_id))
    return product


def _existing_cart(user_id):
    cart = current_domain.repository_for(Cart).find_for_user(user_id)
    if cart is None:
        raise NotFoundError("Cart not found")
    return cart


@marketplace.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = _product(command.product_id)

        cart = open_cart_for(command.user_id)
        cart.add_item(product, command.quantity)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        if command.quantity <= 0:
            return self._remove(command.user_id, command.product_id)

        product = _product(command.product_id, "Product not found in inventory.")
        product.ensure_available(command.quantity)

        cart = _existing_cart(command.user_id)
        cart.update_item_quantity(product, command.quantity)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        return self._remove(command.user_id, command.product_id)

    def _remove(self, user_id, product_id):
        cart = _existing_cart(user_id)
        cart.remove_item(product_id)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)
