"""Demo data for local development: a handful of buyers, sellers and listings."""

import json

from protean.utils.globals import current_domain

from marketplace.auth.passwords import hash_password
from marketplace.product.management import CreateProduct
from marketplace.product.product import Product
from marketplace.user.registration import RegisterUser
from marketplace.user.user import User
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    {"name": "Alice Buyer", "email": "alice@example.com", "role": "buyer"},
    {"name": "Bob Seller", "email": "bob@example.com", "role": "seller"},
    {"name": "Charlie Seller", "email": "charlie@example.com", "role": "seller"},
    {"name": "Diana Buyer", "email": "diana@example.com", "role": "buyer"},
    {"name": "Eco Appliances Inc.", "email": "eco@example.com", "role": "seller"},
]

DEMO_PRODUCTS = [
    {
        "seller": "bob@example.com",
        "name": "Refurbished 4K Smart TV 55 inch",
        "description": "Excellent condition, fully tested, includes remote and 6-month warranty.",
        "price": 299.99,
        "category": "TVs",
        "condition": "Excellent",
        "stock": 10,
        "images": ["https://images.example.com/tv-55-front.jpg", "https://images.example.com/tv-55-side.jpg"],
    },
    {
        "seller": "bob@example.com",
        "name": "Used Laptop 14 inch, 16GB RAM",
        "description": "Light scratches on the lid, new battery, clean install.",
        "price": 449.0,
        "category": "Laptops",
        "condition": "Good",
        "stock": 4,
        "images": ["https://images.example.com/laptop-14.jpg"],
    },
    {
        "seller": "charlie@example.com",
        "name": "Refurbished Smartphone 128GB",
        "description": "Like new, unlocked, replaced screen and battery.",
        "price": 219.5,
        "category": "Phones",
        "condition": "Like New",
        "stock": 15,
        "images": ["https://images.example.com/phone-128.jpg"],
    },
    {
        "seller": "eco@example.com",
        "name": "Energy Efficient Washing Machine",
        "description": "Front loader, 7kg, serviced and certified.",
        "price": 380.0,
        "category": "Appliances",
        "condition": "Good",
        "stock": 3,
        "images": ["https://images.example.com/washer-7kg.jpg"],
    },
    {
        "seller": "eco@example.com",
        "name": "Refurbished Microwave Oven",
        "description": "Compact 20L microwave, fully tested.",
        "price": 59.99,
        "category": "Appliances",
        "condition": "Excellent",
        "stock": 8,
        "images": [],
    },
]


def seed_demo_data() -> dict:
    """Register the demo users and list their products.

    Existing users and listings are reused, so running it twice adds nothing.
    Must run inside an active domain context. Returns counts of what was created.
    """
    users = current_domain.repository_for(User)
    password_hash = hash_password(DEMO_PASSWORD)

    user_ids = {}
    created_users = 0
    for entry in DEMO_USERS:
        existing = users.find_by_email(entry["email"])
        if existing is not None:
            user_ids[entry["email"]] = str(existing.id)
            continue
        user_ids[entry["email"]] = current_domain.process(
            RegisterUser(password_hash=password_hash, **entry), asynchronous=False
        )
        created_users += 1

    products = current_domain.repository_for(Product)
    created_products = 0
    for entry in DEMO_PRODUCTS:
        seller_id = user_ids[entry["seller"]]
        if any(p.name == entry["name"] for p in products.for_seller(seller_id)):
            continue
        fields = {k: v for k, v in entry.items() if k not in ("seller", "images")}
        current_domain.process(
            CreateProduct(seller_id=seller_id, images=json.dumps(entry["images"]), **fields),
            asynchronous=False,
        )
        created_products += 1

    logger.info("demo_data_seeded", users=created_users, products=created_products)
    return {"users": created_users, "products": created_products}
