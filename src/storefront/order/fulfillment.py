"""Shipping and delivery — commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.config import WorkflowSettings
from storefront.domain import storefront
from storefront.notification.helpers import notify_user
from storefront.order.inventory import restore_inventory
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class MarkOrderShipped:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class MarkOrderDelivered:
    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class FulfillmentHandler:
    @handle(MarkOrderShipped)
    def mark_shipped(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.mark_shipped()
        self._restock_if_configured(order, reason="order_shipped")
        repo.add(order)

        notify_user(order.user_id, "order_shipped", {"order_id": str(order.id)}, order_id=str(order.id))

    @handle(MarkOrderDelivered)
    def mark_delivered(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.mark_delivered()
        self._restock_if_configured(order, reason="order_delivered")
        repo.add(order)

        notify_user(order.user_id, "order_delivered", {"order_id": str(order.id)}, order_id=str(order.id))

    @staticmethod
    def _restock_if_configured(order, reason):
        if not WorkflowSettings.from_env().restock_on_fulfillment:
            return
        logger.warning("Restoring stock on fulfillment", order_id=str(order.id), reason=reason)
        restore_inventory(order, reason=reason)
