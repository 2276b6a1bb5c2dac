"""Marketplace error taxonomy.

Field and command validation failures use ``protean.exceptions.ValidationError``;
the classes here cover the business failures that carry their own HTTP status.
"""


class MarketplaceError(Exception):
    """Base class for errors surfaced to API clients as ``{"message": ...}``."""

    status_code = 500

    def __init__(self, message, **details):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(MarketplaceError):
    status_code = 404


class ForbiddenError(MarketplaceError):
    status_code = 403


class EmptyCartError(MarketplaceError):
    status_code = 400

    def __init__(self, message="Cart is empty"):
        super().__init__(message)


class InsufficientStockError(MarketplaceError):
    """Requested quantity exceeds the product's available stock."""

    status_code = 400

    def __init__(self, product_id, product_name, available, requested):
        super().__init__(
            f"Not enough stock for product: {product_name}. Available: {available}, Requested: {requested}",
            product_id=str(product_id),
            product_name=product_name,
            available=available,
            requested=requested,
        )
        self.product_id = str(product_id)
        self.product_name = product_name
        self.available = available
        self.requested = requested


class AuthenticationError(MarketplaceError):
    status_code = 401


class InvalidTokenError(MarketplaceError):
    status_code = 403
