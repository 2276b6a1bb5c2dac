"""Repository for the Order aggregate."""

from marketplace.domain import marketplace
from marketplace.order.order import Order


@marketplace.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        """The user's orders, newest first."""
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").limit(None).all().items
