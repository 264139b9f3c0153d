"""Shared BDD fixtures and step definitions for the order workflow."""

import json

import pytest
from protean import current_domain
from protean.exceptions import InvalidOperationError, ValidationError
from pytest_bdd import given, parsers, then

from storefront.catalogue.product import Product
from storefront.order.order import Order


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def world():
    """Ids created while the scenario runs."""
    return {"products": {}, "order_id": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an admin user")
def admin_user(register_user, world):
    world["admin_id"], _ = register_user(email="admin@example.com", role="admin", full_name="Shop Admin")


@given(parsers.cfparse('a "{role}" buyer with an address'))
def buyer_with_address(register_user, world, role):
    world["buyer_id"], world["address_id"] = register_user(email="buyer@example.com", role=role)


@given(parsers.cfparse('a product "{name}" with wholesale price {price:f} and stock {stock:d}'))
def product_in_catalogue(add_product, world, name, price, stock):
    world["products"][name] = add_product(
        name=name,
        retail_price=price * 2,
        wholesale_price=price,
        in_stock=stock,
    )


@given(parsers.cfparse('the buyer has placed an order for {quantity:d} of "{name}" at {price:f}'))
def placed_order(place_order, world, quantity, name, price):
    world["order_id"] = place_order(
        world["buyer_id"],
        world["address_id"],
        [{"product_id": world["products"][name], "quantity": quantity, "price": price}],
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order is "{status}"'))
def order_has_status(world, status):
    order = current_domain.repository_for(Order).get(world["order_id"])
    assert order.status == status


@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_has_stock(world, name, stock):
    assert current_domain.repository_for(Product).get(world["products"][name]).in_stock == stock


@then("the order is rejected as a bad request")
def rejected_as_bad_request(error):
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse('the order is rejected with "{message}"'))
def rejected_with_message(error, message):
    assert isinstance(error["exc"], ValidationError)
    assert message in json.dumps(error["exc"].messages)


@then("the deletion is forbidden")
def deletion_forbidden(error):
    assert isinstance(error["exc"], InvalidOperationError)
