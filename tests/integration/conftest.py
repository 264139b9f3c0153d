import pytest
from fastapi.testclient import TestClient

from storefront.api.factory import create_app


@pytest.fixture()
def client(_storefront_domain):
    return TestClient(create_app(_storefront_domain))


@pytest.fixture()
def shop(register_user, add_product):
    """An admin, a buyer with an address and one palette product in stock."""
    admin_id, _ = register_user(email="admin@example.com", role="admin", full_name="Shop Admin")
    buyer_id, address_id = register_user(email="buyer@example.com", role="b2c", full_name="Ann Buyer")
    product_id = add_product(
        name="Desk Lamp",
        retail_price=100.0,
        retail_discounted_price=80.0,
        in_stock=10,
        colors=[{"name": "Red", "hex": "#FF0000"}],
    )
    return {
        "admin": {"X-User-Id": admin_id},
        "buyer": {"X-User-Id": buyer_id},
        "admin_id": admin_id,
        "buyer_id": buyer_id,
        "address_id": address_id,
        "product_id": product_id,
    }
