"""FastAPI routes for the marketplace: auth, users, products, cart and orders."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.api.schemas import (
    AddToCartRequest,
    AuthResponse,
    CartResponse,
    CreateProductRequest,
    LoginRequest,
    MessageResponse,
    OrderSchema,
    PlacedOrderResponse,
    PlaceOrderRequest,
    ProductSchema,
    ProfileResponse,
    RegisterRequest,
    UpdateCartItemRequest,
    UpdateProductRequest,
    UpdateProfileRequest,
    UserSchema,
)
from marketplace.auth.dependencies import Principal, current_principal
from marketplace.auth.login import authenticate, issue_token
from marketplace.auth.passwords import hash_password
from marketplace.cart.cart import Cart
from marketplace.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from marketplace.cart.management import ClearCart, OpenCart
from marketplace.cart.view import cart_details
from marketplace.exceptions import ForbiddenError
from marketplace.order.placement import PlaceOrder
from marketplace.order.view import order_for_user, orders_for_user
from marketplace.product.management import CreateProduct, DeleteProduct, UpdateProduct
from marketplace.product.view import catalogue, product_by_id, seller_products
from marketplace.user.profile import UpdateProfile
from marketplace.user.registration import RegisterUser
from marketplace.user.user import User


def _user_schema(user: User) -> UserSchema:
    return UserSchema(
        id=str(user.id),
        name=user.name,
        email=user.email,
        role=user.role,
        created_at=user.created_at,
    )


def _cart_response(cart_id) -> CartResponse:
    cart = current_domain.repository_for(Cart).get(cart_id)
    return CartResponse.model_validate(cart_details(cart))


# ---------------------------------------------------------------------------
# Auth Router
# ---------------------------------------------------------------------------
auth_router = APIRouter(prefix="/api/auth", tags=["auth"])


@auth_router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterRequest) -> AuthResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password),
        role=body.role,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return AuthResponse(token=issue_token(user), user=_user_schema(user), message="User registered successfully")


@auth_router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest) -> AuthResponse:
    user = authenticate(body.email, body.password)
    return AuthResponse(token=issue_token(user), user=_user_schema(user), message="Login successful")


@auth_router.get("/me", response_model=UserSchema)
async def me(principal: Principal = Depends(current_principal)) -> UserSchema:
    return _user_schema(current_domain.repository_for(User).get(principal.user_id))


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/api/users", tags=["users"])


@user_router.get("/profile", response_model=UserSchema)
async def get_profile(principal: Principal = Depends(current_principal)) -> UserSchema:
    return _user_schema(current_domain.repository_for(User).get(principal.user_id))


@user_router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    body: UpdateProfileRequest, principal: Principal = Depends(current_principal)
) -> ProfileResponse:
    command = UpdateProfile(
        user_id=principal.user_id,
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password) if body.password else None,
    )
    changed = current_domain.process(command, asynchronous=False)

    user = current_domain.repository_for(User).get(principal.user_id)
    message = "Profile updated successfully" if changed else "No changes detected."
    return ProfileResponse(message=message, user=_user_schema(user))


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/api/products", tags=["products"])


@product_router.get("", response_model=list[ProductSchema])
async def list_products(category: str | None = None, condition: str | None = None) -> list[ProductSchema]:
    return [ProductSchema.model_validate(p) for p in catalogue(category=category, condition=condition)]


@product_router.get("/seller", response_model=list[ProductSchema])
async def list_seller_products(principal: Principal = Depends(current_principal)) -> list[ProductSchema]:
    if not principal.is_seller:
        raise ForbiddenError("Forbidden: Only sellers can view their products.")
    return [ProductSchema.model_validate(p) for p in seller_products(principal.user_id)]


@product_router.get("/{product_id}", response_model=ProductSchema)
async def get_product(product_id: str) -> ProductSchema:
    return ProductSchema.model_validate(product_by_id(product_id))


@product_router.post("", status_code=201, response_model=ProductSchema)
async def create_product(
    body: CreateProductRequest, principal: Principal = Depends(current_principal)
) -> ProductSchema:
    command = CreateProduct(
        seller_id=principal.user_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        condition=body.condition,
        stock=body.stock,
        images=json.dumps(body.images),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductSchema.model_validate(product_by_id(product_id))


@product_router.put("/{product_id}", response_model=ProductSchema)
async def update_product(
    product_id: str, body: UpdateProductRequest, principal: Principal = Depends(current_principal)
) -> ProductSchema:
    command = UpdateProduct(
        seller_id=principal.user_id,
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        condition=body.condition,
        stock=body.stock,
        images=json.dumps(body.images) if body.images is not None else None,
    )
    current_domain.process(command, asynchronous=False)
    return ProductSchema.model_validate(product_by_id(product_id))


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str, principal: Principal = Depends(current_principal)) -> MessageResponse:
    command = DeleteProduct(seller_id=principal.user_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Product deleted successfully")


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(principal: Principal = Depends(current_principal)) -> CartResponse:
    cart_id = current_domain.process(OpenCart(user_id=principal.user_id), asynchronous=False)
    return _cart_response(cart_id)


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, principal: Principal = Depends(current_principal)) -> CartResponse:
    command = AddToCart(
        user_id=principal.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    cart_id = current_domain.process(command, asynchronous=False)
    return _cart_response(cart_id)


@cart_router.put("/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: str, body: UpdateCartItemRequest, principal: Principal = Depends(current_principal)
) -> CartResponse:
    command = UpdateCartQuantity(
        user_id=principal.user_id,
        product_id=product_id,
        quantity=body.quantity,
    )
    cart_id = current_domain.process(command, asynchronous=False)
    return _cart_response(cart_id)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(product_id: str, principal: Principal = Depends(current_principal)) -> CartResponse:
    command = RemoveFromCart(user_id=principal.user_id, product_id=product_id)
    cart_id = current_domain.process(command, asynchronous=False)
    return _cart_response(cart_id)


@cart_router.delete("", response_model=MessageResponse)
async def clear_cart(principal: Principal = Depends(current_principal)) -> MessageResponse:
    current_domain.process(ClearCart(user_id=principal.user_id), asynchronous=False)
    return MessageResponse(message="Cart cleared successfully")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=PlacedOrderResponse)
async def place_order(body: PlaceOrderRequest, principal: Principal = Depends(current_principal)) -> PlacedOrderResponse:
    """Check out the caller's cart.

    1. Validate the shipping address
    2. Re-check stock for every cart line
    3. Record the order, withdraw stock and empty the cart in one unit of work
    """
    address = body.shipping_address
    command = PlaceOrder(
        user_id=principal.user_id,
        full_name=address.full_name if address else None,
        address=address.address if address else None,
        city=address.city if address else None,
        state=address.state if address else None,
        zip_code=address.zip_code if address else None,
        country=address.country if address else None,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = order_for_user(order_id, principal.user_id)
    return PlacedOrderResponse(message="Order placed successfully", order=OrderSchema.model_validate(order))


@order_router.get("", response_model=list[OrderSchema])
async def list_orders(principal: Principal = Depends(current_principal)) -> list[OrderSchema]:
    return [OrderSchema.model_validate(order) for order in orders_for_user(principal.user_id)]


@order_router.get("/{order_id}", response_model=OrderSchema)
async def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> OrderSchema:
    return OrderSchema.model_validate(order_for_user(order_id, principal.user_id))
