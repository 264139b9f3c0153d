import json
import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture(autouse=True)
def workflow_env(monkeypatch):
    """Start every test from the default workflow settings."""
    for name in ("USER_CANCEL_WINDOW_MINUTES", "RESTOCK_ON_FULFILLMENT", "MEDIA_URL_PREFIX"):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Builders shared by application, integration and BDD tests
# ---------------------------------------------------------------------------
@pytest.fixture()
def register_user():
    """Register a user with one address. Returns ``(user_id, address_id)``."""
    from protean import current_domain

    from storefront.account.registration import AddAddress, RegisterUser

    def _register(email="buyer@example.com", role="b2c", full_name="Test Buyer"):
        user_id = current_domain.process(
            RegisterUser(full_name=full_name, email=email, number="5550100", role=role),
            asynchronous=False,
        )
        address_id = current_domain.process(
            AddAddress(
                user_id=user_id,
                label="Home",
                street="1 Market St",
                city="Springfield",
                state="IL",
                postal_code="62701",
                country="US",
            ),
            asynchronous=False,
        )
        return user_id, address_id

    return _register


@pytest.fixture()
def add_product():
    """Add a catalogue product. Returns its id."""
    from protean import current_domain

    from storefront.catalogue.management import AddProduct

    def _add(
        name="Desk Lamp",
        retail_price=100.0,
        wholesale_price=70.0,
        retail_discounted_price=0.0,
        wholesale_discounted_price=0.0,
        in_stock=10,
        colors=None,
        product_image="lamp.jpg",
        images=None,
    ):
        return current_domain.process(
            AddProduct(
                name=name,
                retail_price=retail_price,
                wholesale_price=wholesale_price,
                retail_discounted_price=retail_discounted_price,
                wholesale_discounted_price=wholesale_discounted_price,
                in_stock=in_stock,
                colors=json.dumps(colors or []),
                product_image=product_image,
                images=json.dumps(images or []),
            ),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def place_order():
    """Place an order through the command. Returns the order id."""
    from protean import current_domain

    from storefront.order.creation import PlaceOrder

    def _place(user_id, address_id, items, role=None):
        return current_domain.process(
            PlaceOrder(
                user_id=user_id,
                role=role,
                items=json.dumps(items),
                address_id=address_id,
            ),
            asynchronous=False,
        )

    return _place
