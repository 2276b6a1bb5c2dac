"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from marketplace.domain import marketplace
from marketplace.product.product import Product


@marketplace.repository(part_of=Product)
class ProductRepository:
    def find(self, product_id) -> Product | None:
        """Like ``get``, but returns ``None`` for a missing product."""
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError:
            return None

    def listing(self, category: str | None = None, condition: str | None = None) -> list[Product]:
        """Catalogue products, newest first, with optional exact-match filters."""
        query = self._dao.query
        if category:
            query = query.filter(category=category)
        if condition:
            query = query.filter(condition=condition)
        return query.order_by("-created_at").limit(None).all().items

    def for_seller(self, seller_id) -> list[Product]:
        return self._dao.query.filter(seller_id=str(seller_id)).order_by("-created_at").limit(None).all().items
