"""Order aggregate — the core of the storefront order workflow.

An order is created once per checkout with server-computed line prices and a
frozen subtotal. After creation only its status, reason and timestamps move.

State Machine:
    ORDER_REQUESTED → ORDER_CONFIRMED → ORDER_SHIPPED → ORDER_DELIVERED
    ORDER_DELIVERED → RETURN_REQUESTED → RETURN_APPROVED | RETURN_DISAPPROVED
    ORDER_REQUESTED → ORDER_CANCELLED (admin, or owner within the cancel window)

``PAYMENT_COMPLETED`` is a valid status value that only the administrative
status overwrite can set.
"""

from collections import defaultdict
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean.exceptions import InvalidOperationError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.order.events import (
    OrderCancelled,
    OrderConfirmed,
    OrderDelivered,
    OrderPlaced,
    OrderShipped,
    OrderStatusOverridden,
    ReturnApproved,
    ReturnDisapproved,
    ReturnRequested,
)
from storefront.shared.money import line_total, to_money


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    ORDER_REQUESTED = "order-requested"
    PAYMENT_COMPLETED = "payment-completed"
    ORDER_CONFIRMED = "order-confirmed"
    ORDER_SHIPPED = "order-shipped"
    ORDER_DELIVERED = "order-delivered"
    ORDER_CANCELLED = "order-cancelled"
    RETURN_REQUESTED = "return-requested"
    RETURN_APPROVED = "return-approved"
    RETURN_DISAPPROVED = "return-disapproved"


class OrderAction(Enum):
    CONFIRM = "confirm"
    CANCEL = "cancel"
    SHIP = "ship"
    DELIVER = "deliver"
    REQUEST_RETURN = "request_return"
    APPROVE_RETURN = "approve_return"
    DISAPPROVE_RETURN = "disapprove_return"


class CancellationActor(Enum):
    ADMIN = "admin"
    USER = "user"


# action → (allowed source states, target state, message when the source is wrong)
_TRANSITIONS = {
    OrderAction.CONFIRM: (
        {OrderStatus.ORDER_REQUESTED},
        OrderStatus.ORDER_CONFIRMED,
        "Only requested orders can be confirmed",
    ),
    OrderAction.CANCEL: (
        {OrderStatus.ORDER_REQUESTED},
        OrderStatus.ORDER_CANCELLED,
        "Only requested orders can be canceled",
    ),
    OrderAction.SHIP: (
        {OrderStatus.ORDER_CONFIRMED},
        OrderStatus.ORDER_SHIPPED,
        "Only confirmed orders can be shipped",
    ),
    OrderAction.DELIVER: (
        {OrderStatus.ORDER_SHIPPED},
        OrderStatus.ORDER_DELIVERED,
        "Only shipped orders can be delivered",
    ),
    OrderAction.REQUEST_RETURN: (
        {OrderStatus.ORDER_DELIVERED},
        OrderStatus.RETURN_REQUESTED,
        "Returns can only be requested for delivered orders",
    ),
    OrderAction.APPROVE_RETURN: (
        {OrderStatus.RETURN_REQUESTED},
        OrderStatus.RETURN_APPROVED,
        "Only requested returns can be approved",
    ),
    OrderAction.DISAPPROVE_RETURN: (
        {OrderStatus.RETURN_REQUESTED},
        OrderStatus.RETURN_DISAPPROVED,
        "Only requested returns can be disapproved",
    ),
}

_DELETABLE_STATES = {
    OrderStatus.ORDER_CANCELLED,
    OrderStatus.RETURN_DISAPPROVED,
    OrderStatus.RETURN_APPROVED,
    OrderStatus.ORDER_DELIVERED,
}

# Stock has left the warehouse for good in these states
_NO_RESTOCK_ON_DELETE = {OrderStatus.ORDER_DELIVERED, OrderStatus.ORDER_SHIPPED}


def _as_utc(moment):
    # Some providers hand back naive datetimes; they are stored as UTC
    return moment.replace(tzinfo=UTC) if moment.tzinfo is None else moment


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class AddressSnapshot:
    """The delivery address as it was when the order was placed.

    Copied from the user's address book; later edits to the book do not
    reach placed orders.
    """

    label = String(max_length=50)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)

    @classmethod
    def from_address(cls, address):
        return cls(
            label=address.label,
            street=address.street,
            city=address.city,
            state=address.state,
            postal_code=address.postal_code,
            country=address.country,
        )


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderLine:
    product_id = Identifier(required=True)
    color = String(max_length=50)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    position = Integer(required=True, min_value=0)

    @property
    def total(self):
        return line_total(self.price, self.quantity)


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    lines = HasMany(OrderLine)
    address = ValueObject(AddressSnapshot, required=True)
    subtotal = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.ORDER_REQUESTED.value)
    reason = Text()
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, address, lines):
        """Create a requested order.

        Args:
            address: An ``AddressSnapshot``.
            lines: List of dicts with ``product_id``, ``color``, ``quantity``
                and ``price`` (the authoritative unit price), in request order.
        """
        if not lines:
            raise ValidationError({"lines": ["An order must contain at least one item"]})

        subtotal = to_money(sum((line_total(line["price"], line["quantity"]) for line in lines), to_money(0)))
        now = datetime.now(UTC)

        order = cls(
            user_id=user_id,
            lines=[
                OrderLine(
                    product_id=line["product_id"],
                    color=line.get("color"),
                    quantity=line["quantity"],
                    price=float(to_money(line["price"])),
                    position=position,
                )
                for position, line in enumerate(lines)
            ],
            address=address,
            subtotal=float(subtotal),
            status=OrderStatus.ORDER_REQUESTED.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                subtotal=float(subtotal),
                line_count=len(lines),
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def ordered_lines(self) -> list:
        return sorted(self.lines, key=lambda line: line.position)

    def quantities_by_product(self) -> dict[str, int]:
        """Total ordered quantity per product id, across lines."""
        quantities = defaultdict(int)
        for line in self.ordered_lines:
            quantities[str(line.product_id)] += line.quantity
        return dict(quantities)

    def is_owned_by(self, user_id) -> bool:
        return str(self.user_id) == str(user_id)

    @property
    def restocks_on_delete(self) -> bool:
        return OrderStatus(self.status) not in _NO_RESTOCK_ON_DELETE

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def _assert_allowed(self, action):
        sources, _, message = _TRANSITIONS[action]
        if OrderStatus(self.status) not in sources:
            raise ValidationError({"status": [message]})

    def _transition(self, action, reason=None):
        self._assert_allowed(action)
        _, target, _ = _TRANSITIONS[action]
        now = datetime.now(UTC)
        self.status = target.value
        if reason is not None:
            self.reason = reason
        self.updated_at = now
        return now

    def _assert_owner(self, user_id, action_label):
        if not self.is_owned_by(user_id):
            raise InvalidOperationError(f"You can only {action_label} your own orders")

    def confirm(self):
        now = self._transition(OrderAction.CONFIRM)
        self.raise_(OrderConfirmed(order_id=str(self.id), confirmed_at=now))

    def cancel_by_admin(self, reason=None):
        now = self._transition(OrderAction.CANCEL, reason=reason)
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                reason=reason,
                cancelled_by=CancellationActor.ADMIN.value,
                cancelled_at=now,
            )
        )

    def cancel_by_user(self, user_id, reason=None, window_minutes=30, now=None):
        """Cancel on behalf of the owner.

        Allowed while the order is still requested and no more than
        ``window_minutes`` have passed since it was placed. The boundary
        itself is inside the window.
        """
        self._assert_owner(user_id, "cancel")
        self._assert_allowed(OrderAction.CANCEL)

        now = _as_utc(now or datetime.now(UTC))
        if now - _as_utc(self.created_at) > timedelta(minutes=window_minutes):
            raise ValidationError(
                {"created_at": [f"Orders older than {window_minutes} minutes cannot be deleted."]}
            )

        changed_at = self._transition(OrderAction.CANCEL, reason=reason)
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                reason=reason,
                cancelled_by=CancellationActor.USER.value,
                cancelled_at=changed_at,
            )
        )

    def mark_shipped(self):
        now = self._transition(OrderAction.SHIP)
        self.raise_(OrderShipped(order_id=str(self.id), shipped_at=now))

    def mark_delivered(self):
        now = self._transition(OrderAction.DELIVER)
        self.raise_(OrderDelivered(order_id=str(self.id), delivered_at=now))

    def request_return(self, user_id, reason=None):
        self._assert_owner(user_id, "return")
        now = self._transition(OrderAction.REQUEST_RETURN, reason=reason)
        self.raise_(ReturnRequested(order_id=str(self.id), reason=reason, requested_at=now))

    def approve_return(self):
        now = self._transition(OrderAction.APPROVE_RETURN)
        self.raise_(ReturnApproved(order_id=str(self.id), approved_at=now))

    def disapprove_return(self, reason=None):
        now = self._transition(OrderAction.DISAPPROVE_RETURN, reason=reason)
        self.raise_(ReturnDisapproved(order_id=str(self.id), reason=reason, disapproved_at=now))

    def assert_deletable(self):
        current = OrderStatus(self.status)
        if current not in _DELETABLE_STATES:
            raise InvalidOperationError(f"Orders in {current.value} status cannot be deleted")

    def override_status(self, value):
        """Write ``value`` as the status without checking the transition rules."""
        valid = {status.value for status in OrderStatus}
        if value not in valid:
            raise ValidationError({"status": [f"Invalid status value: {value}"]})

        previous = self.status
        now = datetime.now(UTC)
        self.status = value
        self.updated_at = now
        self.raise_(
            OrderStatusOverridden(
                order_id=str(self.id),
                previous_status=previous,
                new_status=value,
                overridden_at=now,
            )
        )
