"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order and its stock was reserved."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    subtotal = Float(required=True)
    line_count = Integer(required=True)
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderConfirmed:
    __version__ = 1

    order_id = Identifier(required=True)
    confirmed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled before confirmation, by an admin or its owner."""

    __version__ = 1

    order_id = Identifier(required=True)
    reason = Text()
    cancelled_by = String(required=True, max_length=20)
    cancelled_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderShipped:
    __version__ = 1

    order_id = Identifier(required=True)
    shipped_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderDelivered:
    __version__ = 1

    order_id = Identifier(required=True)
    delivered_at = DateTime(required=True)


@storefront.event(part_of="Order")
class ReturnRequested:
    __version__ = 1

    order_id = Identifier(required=True)
    reason = Text()
    requested_at = DateTime(required=True)


@storefront.event(part_of="Order")
class ReturnApproved:
    __version__ = 1

    order_id = Identifier(required=True)
    approved_at = DateTime(required=True)


@storefront.event(part_of="Order")
class ReturnDisapproved:
    __version__ = 1

    order_id = Identifier(required=True)
    reason = Text()
    disapproved_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusOverridden:
    """An admin wrote a status directly, bypassing the transition rules."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    overridden_at = DateTime(required=True)
