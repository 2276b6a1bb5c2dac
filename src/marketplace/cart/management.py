"""Cart lifecycle: commands and handler.

Carts are opened lazily the first time a user touches theirs.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.cart.cart import Cart
from marketplace.domain import marketplace


@marketplace.command(part_of="Cart")
class OpenCart:
    """Return the user's cart, creating an empty one if none exists."""

    user_id = Identifier(required=True)


@marketplace.command(part_of="Cart")
class ClearCart:
    """Empty the user's cart. A no-op when the user has no cart or it is already empty."""

    user_id = Identifier(required=True)


def open_cart_for(user_id):
    repo = current_domain.repository_for(Cart)
    cart = repo.find_for_user(user_id)
    if cart is None:
        cart = Cart.open_for(user_id)
        repo.add(cart)
    return cart


@marketplace.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(OpenCart)
    def open_cart(self, command):
        return str(open_cart_for(command.user_id).id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_id)
        if cart is None or cart.is_empty:
            return

        cart.clear()
        repo.add(cart)
