"""Pydantic request/response schemas for the marketplace API.

These are external contracts, kept separate from the internal Protean
commands. Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class MessageResponse(ApiModel):
    message: str


# ---------------------------------------------------------------------------
# Users & auth
# ---------------------------------------------------------------------------
class RegisterRequest(ApiModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    role: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Alice Buyer",
                    "email": "alice@example.com",
                    "password": "password123",
                    "role": "buyer",
                }
            ]
        }
    }


class LoginRequest(ApiModel):
    email: str
    password: str


class UserSchema(ApiModel):
    id: str
    name: str
    email: str
    role: str
    created_at: datetime | None = None


class AuthResponse(ApiModel):
    token: str
    user: UserSchema
    message: str


class UpdateProfileRequest(ApiModel):
    name: str | None = None
    email: str | None = None
    password: str | None = Field(default=None, min_length=6)


class ProfileResponse(ApiModel):
    message: str
    user: UserSchema


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(ApiModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: str = Field(min_length=1)
    condition: str = Field(min_length=1)
    stock: int = Field(ge=0)
    images: list[str] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Refurbished 4K Smart TV 55 inch",
                    "description": "Excellent condition, fully tested, 6-month warranty.",
                    "price": 299.99,
                    "category": "TVs",
                    "condition": "Excellent",
                    "stock": 10,
                    "images": ["https://example.com/images/tv-front.jpg"],
                }
            ]
        }
    }


class UpdateProductRequest(ApiModel):
    name: str | None = None
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    category: str | None = None
    condition: str | None = None
    stock: int | None = Field(default=None, ge=0)
    images: list[str] | None = None


class ProductSchema(ApiModel):
    id: str
    name: str
    description: str
    price: float
    category: str
    condition: str
    stock: int
    images: list[str]
    seller_id: str
    seller_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(ApiModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1, default=1)


class UpdateCartItemRequest(ApiModel):
    quantity: int


class CartItemSchema(ApiModel):
    id: str
    product_id: str
    name: str
    price: float
    images: list[str]
    condition: str
    stock: int
    quantity: int


class CartResponse(ApiModel):
    cart_id: str
    items: list[CartItemSchema]
    total_price: float


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class ShippingAddressSchema(ApiModel):
    # Presence is checked by the PlaceOrder command
    full_name: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = Field(default=None, alias="zip")
    country: str | None = None


class PlaceOrderRequest(ApiModel):
    shipping_address: ShippingAddressSchema | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shippingAddress": {
                        "fullName": "Alice Buyer",
                        "address": "12 Green Lane",
                        "city": "Springfield",
                        "state": "IL",
                        "zip": "62701",
                        "country": "USA",
                    }
                }
            ]
        }
    }


class OrderItemSchema(ApiModel):
    id: str
    product_id: str
    name: str
    images: list[str]
    condition: str | None = None
    quantity: int
    price_at_purchase: float


class OrderSchema(ApiModel):
    id: str
    user_id: str
    total_amount: float
    status: str
    shipping_address: ShippingAddressSchema
    items: list[OrderItemSchema]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PlacedOrderResponse(ApiModel):
    message: str
    order: OrderSchema
