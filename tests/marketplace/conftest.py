import json

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture

PASSWORD = "password123"


@pytest.fixture(scope="session")
def marketplace_bed():
    from marketplace.domain import marketplace

    bed = DomainFixture(marketplace)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(marketplace_bed):
    with marketplace_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture(scope="session")
def password_hash():
    from marketplace.auth.passwords import hash_password

    return hash_password(PASSWORD)


@pytest.fixture()
def register_user(password_hash):
    from marketplace.user.registration import RegisterUser

    def _register(name="Alice Buyer", email="alice@example.com", role="buyer"):
        command = RegisterUser(name=name, email=email, password_hash=password_hash, role=role)
        return current_domain.process(command, asynchronous=False)

    return _register


@pytest.fixture()
def seller_id(register_user):
    return register_user(name="Bob Seller", email="bob@example.com", role="seller")


@pytest.fixture()
def buyer_id(register_user):
    return register_user(name="Alice Buyer", email="alice@example.com", role="buyer")


@pytest.fixture()
def make_product(seller_id):
    from marketplace.product.management import CreateProduct

    def _make(**overrides):
        fields = {
            "seller_id": seller_id,
            "name": "Refurbished 4K TV",
            "description": "Fully tested, minor scratches on the stand.",
            "price": 20.0,
            "category": "TVs",
            "condition": "Excellent",
            "stock": 10,
            "images": json.dumps(["https://images.example.com/tv.jpg"]),
        }
        fields.update(overrides)
        return current_domain.process(CreateProduct(**fields), asynchronous=False)

    return _make
