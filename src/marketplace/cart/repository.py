"""Repository for the Cart aggregate."""

from marketplace.cart.cart import Cart
from marketplace.domain import marketplace


@marketplace.repository(part_of=Cart)
class CartRepository:
    def find_for_user(self, user_id) -> Cart | None:
        """The user's cart, or ``None`` if they never opened one."""
        return self._dao.query.filter(user_id=str(user_id)).all().first
