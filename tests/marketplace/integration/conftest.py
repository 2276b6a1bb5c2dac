import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

PASSWORD = "password123"


@pytest.fixture()
def client(marketplace_bed):
    from marketplace.api import ROUTERS, register_error_handlers
    from marketplace.domain import marketplace

    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with marketplace.domain_context():
            return await call_next(request)

    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return TestClient(app, raise_server_exceptions=False)


def _signup(client, name, email, role):
    response = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": PASSWORD, "role": role},
    )
    assert response.status_code == 201
    body = response.json()
    return {"id": body["user"]["id"], "headers": {"Authorization": f"Bearer {body['token']}"}}


@pytest.fixture()
def buyer(client):
    return _signup(client, "Alice Buyer", "alice@example.com", "buyer")


@pytest.fixture()
def seller(client):
    return _signup(client, "Bob Seller", "bob@example.com", "seller")


@pytest.fixture()
def other_seller(client):
    return _signup(client, "Charlie Seller", "charlie@example.com", "seller")


@pytest.fixture()
def list_product(client, seller):
    def _list(**overrides):
        payload = {
            "name": "Refurbished 4K TV",
            "description": "Fully tested, minor scratches on the stand.",
            "price": 20.0,
            "category": "TVs",
            "condition": "Excellent",
            "stock": 10,
            "images": ["https://images.example.com/tv.jpg"],
        }
        payload.update(overrides)
        response = client.post("/api/products", json=payload, headers=seller["headers"])
        assert response.status_code == 201
        return response.json()["id"]

    return _list
