"""Order placement — command and handler.

Every check runs before the first write. The handler's unit of work then
commits the order, the stock decrements, the notifications and the cart
pruning together.
"""

import json
from collections import defaultdict
from decimal import InvalidOperation

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.notification.helpers import notify_admins, notify_user
from storefront.order.order import AddressSnapshot, Order
from storefront.shared.money import parse_amount, same_amount

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    """Place an order for the items a user submitted at checkout."""

    user_id = Identifier(required=True)
    role = String(max_length=10)  # Falls back to the user's stored role
    items = Text(required=True)  # JSON: list of {product_id, color, quantity, price}
    address_id = Identifier(required=True)


def _parse_quantity(raw, product_name):
    quantity = None
    if isinstance(raw, int) and not isinstance(raw, bool):
        quantity = raw
    elif isinstance(raw, float) and raw.is_integer():
        quantity = int(raw)
    elif isinstance(raw, str) and raw.strip().isdigit():
        quantity = int(raw)

    if quantity is None or quantity < 1:
        raise ValidationError({"quantity": [f"Quantity for product {product_name} must be a positive integer"]})
    return quantity


def _parse_price(raw, product_name):
    if raw is None or isinstance(raw, bool):
        raise ValidationError({"price": [f"Price for product {product_name} must be a number"]})
    try:
        return parse_amount(raw)
    except InvalidOperation:
        raise ValidationError({"price": [f"Price for product {product_name} must be a number"]}) from None


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        user = current_domain.repository_for(User).get(command.user_id)
        address = user.find_address(command.address_id)
        if address is None:
            raise ObjectNotFoundError(f"Address {command.address_id} not found")

        requested = json.loads(command.items)
        if not requested:
            raise ValidationError({"items": ["An order must contain at least one item"]})

        role = command.role or user.role
        product_repo = current_domain.repository_for(Product)
        products = {}
        demand = defaultdict(int)
        lines = []

        for item in requested:
            if not item.get("product_id"):
                raise ValidationError({"product_id": ["Every item must reference a product"]})
            product_id = str(item["product_id"])
            product = products.get(product_id) or product_repo.get(product_id)
            products[product_id] = product

            unit_price = product.unit_price_for(role)
            submitted = _parse_price(item.get("price"), product.name)
            if not same_amount(submitted, unit_price):
                raise ValidationError(
                    {
                        "price": [
                            f"Price mismatch for product {product.name}. "
                            f"Expected: {unit_price}, Received: {item.get('price')}"
                        ]
                    }
                )

            product.check_color(item.get("color"))

            quantity = _parse_quantity(item.get("quantity"), product.name)
            demand[product_id] += quantity
            if demand[product_id] > (product.in_stock or 0):
                raise ValidationError(
                    {
                        "in_stock": [
                            f"Insufficient stock for product {product.name}. "
                            f"Available: {product.in_stock}, Requested: {demand[product_id]}"
                        ]
                    }
                )

            lines.append(
                {
                    "product_id": product_id,
                    "color": item.get("color"),
                    "quantity": quantity,
                    "price": unit_price,
                }
            )

        order = Order.place(
            user_id=str(user.id),
            address=AddressSnapshot.from_address(address),
            lines=lines,
        )
        current_domain.repository_for(Order).add(order)

        for product_id, quantity in order.quantities_by_product().items():
            product = products[product_id]
            product.decrement_stock(quantity, order_id=order.id)
            product_repo.add(product)

        order_id = str(order.id)
        context = {"order_id": order_id, "customer_name": user.full_name, "subtotal": f"{order.subtotal:.2f}"}
        notify_user(user.id, "order_placed", context, order_id=order_id)
        notify_admins("new_order_admin", context, order_id=order_id)

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.find_for_user(user.id)
        if cart is not None and cart.prune(lines):
            cart_repo.add(cart)

        logger.info(
            "Order placed",
            order_id=order_id,
            user_id=str(user.id),
            role=role,
            subtotal=order.subtotal,
            lines=len(lines),
        )
        return order_id
