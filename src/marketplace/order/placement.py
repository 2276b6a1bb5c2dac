"""Order placement: command and handler.

Checkout turns the buyer's server-side cart into an order in a single unit of
work: stock is re-checked for every line, then the order is recorded, stock is
withdrawn and the cart is emptied. Any failure leaves all three untouched.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.cart.cart import Cart
from marketplace.domain import marketplace
from marketplace.exceptions import EmptyCartError, InsufficientStockError
from marketplace.order.order import Order, ShippingAddress
from marketplace.product.product import Product
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


@marketplace.command(part_of="Order")
class PlaceOrder:
    """Check out the user's cart to the given shipping address."""

    user_id = Identifier(required=True)
    full_name = String(required=True, max_length=100)
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@marketplace.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        cart_repo = current_domain.repository_for(Cart)
        product_repo = current_domain.repository_for(Product)

        cart = cart_repo.find_for_user(command.user_id)
        if cart is None:
            raise EmptyCartError("Cart not found or empty")
        if cart.is_empty:
            raise EmptyCartError()

        # Lines whose product has left the catalogue are not purchasable
        lines = []
        for item in cart.items:
            product = product_repo.find(item.product_id)
            if product is None:
                logger.warning("cart_item_product_missing", cart_id=str(cart.id), product_id=str(item.product_id))
                continue
            lines.append((item, product))
        if not lines:
            raise EmptyCartError()

        # Nothing is written unless every line can be fulfilled
        for item, product in lines:
            if product.stock < item.quantity:
                logger.info(
                    "order_rejected_insufficient_stock",
                    user_id=str(command.user_id),
                    product_id=str(product.id),
                    available=product.stock,
                    requested=item.quantity,
                )
                raise InsufficientStockError(
                    product_id=product.id,
                    product_name=product.name,
                    available=product.stock,
                    requested=item.quantity,
                )

        order = Order.place(
            user_id=command.user_id,
            shipping_address=ShippingAddress(
                full_name=command.full_name,
                address=command.address,
                city=command.city,
                state=command.state,
                zip_code=command.zip_code,
                country=command.country,
            ),
            lines=[
                {
                    "product_id": product.id,
                    "product_name": product.name,
                    "quantity": item.quantity,
                    "price_at_purchase": product.price,
                }
                for item, product in lines
            ],
        )
        current_domain.repository_for(Order).add(order)

        for item, product in lines:
            product.withdraw_stock(item.quantity, order_id=str(order.id))
            product_repo.add(product)

        cart.clear()
        cart_repo.add(cart)

        logger.info(
            "order_placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total_amount=order.total_amount,
            item_count=len(lines),
        )
        return str(order.id)
