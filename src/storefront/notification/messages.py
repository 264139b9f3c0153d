"""Message templates for order notifications.

Each template renders the message text for one audience of one order
transition and carries the notification type shown to that audience.
"""

from storefront.notification.notification import NotificationType


class OrderPlacedMessage:
    notification_type = NotificationType.SUCCESS.value

    @staticmethod
    def render(context: dict) -> str:
        return f"Your order #{context['order_id']} has been placed successfully."


class NewOrderAdminMessage:
    notification_type = NotificationType.INFO.value

    @staticmethod
    def render(context: dict) -> str:
        customer = context.get("customer_name") or "A customer"
        return f"New order #{context['order_id']} placed by {customer}. Subtotal: {context.get('subtotal', 'N/A')}."


class OrderConfirmedMessage:
    notification_type = NotificationType.SUCCESS.value

    @staticmethod
    def render(context: dict) -> str:
        return f"Your order #{context['order_id']} has been confirmed."


class OrderCancelledMessage:
    notification_type = NotificationType.ERROR.value

    @staticmethod
    def render(context: dict) -> str:
        reason = context.get("reason") or "no reason given"
        return f"Your order #{context['order_id']} has been cancelled. Reason: {reason}."


class OrderShippedMessage:
    notification_type = NotificationType.INFO.value

    @staticmethod
    def render(context: dict) -> str:
        return f"Your order #{context['order_id']} has been shipped."


class OrderDeliveredMessage:
    notification_type = NotificationType.SUCCESS.value

    @staticmethod
    def render(context: dict) -> str:
        return f"Your order #{context['order_id']} has been delivered."


class ReturnRequestedMessage:
    notification_type = NotificationType.INFO.value

    @staticmethod
    def render(context: dict) -> str:
        return f"Your return request for order #{context['order_id']} has been received."


class ReturnRequestedAdminMessage:
    notification_type = NotificationType.WARNING.value

    @staticmethod
    def render(context: dict) -> str:
        reason = context.get("reason") or "no reason given"
        return f"Return requested for order #{context['order_id']}. Reason: {reason}."


class ReturnApprovedMessage:
    notification_type = NotificationType.SUCCESS.value

    @staticmethod
    def render(context: dict) -> str:
        return f"Your return request for order #{context['order_id']} has been approved."


class ReturnDisapprovedMessage:
    notification_type = NotificationType.ERROR.value

    @staticmethod
    def render(context: dict) -> str:
        reason = context.get("reason") or "no reason given"
        return f"Your return request for order #{context['order_id']} has been disapproved. Reason: {reason}."


class ReturnDisapprovedAdminMessage:
    notification_type = NotificationType.INFO.value

    @staticmethod
    def render(context: dict) -> str:
        return f"Return for order #{context['order_id']} was disapproved."


MESSAGE_REGISTRY: dict[str, type] = {
    "order_placed": OrderPlacedMessage,
    "new_order_admin": NewOrderAdminMessage,
    "order_confirmed": OrderConfirmedMessage,
    "order_cancelled": OrderCancelledMessage,
    "order_shipped": OrderShippedMessage,
    "order_delivered": OrderDeliveredMessage,
    "return_requested": ReturnRequestedMessage,
    "return_requested_admin": ReturnRequestedAdminMessage,
    "return_approved": ReturnApprovedMessage,
    "return_disapproved": ReturnDisapprovedMessage,
    "return_disapproved_admin": ReturnDisapprovedAdminMessage,
}


def get_message(name: str):
    """Look up a message template class by name."""
    template_cls = MESSAGE_REGISTRY.get(name)
    if template_cls is None:
        raise ValueError(f"No message template registered under: {name}")
    return template_cls
