"""Order cancellation — commands and handler.

Admins may cancel any requested order. Owners may cancel their own requested
order within the configured window after placing it. Both give the stock back.
"""

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.config import WorkflowSettings
from storefront.domain import storefront
from storefront.notification.helpers import notify_user
from storefront.order.inventory import restore_inventory
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrderByAdmin:
    order_id = Identifier(required=True)
    reason = Text()


@storefront.command(part_of="Order")
class CancelOrderByUser:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    reason = Text()


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrderByAdmin)
    def cancel_by_admin(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel_by_admin(reason=command.reason)

        restore_inventory(order, reason="order_cancelled")
        repo.add(order)

        notify_user(
            order.user_id,
            "order_cancelled",
            {"order_id": str(order.id), "reason": command.reason},
            order_id=str(order.id),
        )
        logger.info("Order cancelled by admin", order_id=str(order.id))

    @handle(CancelOrderByUser)
    def cancel_by_user(self, command):
        settings = WorkflowSettings.from_env()
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.cancel_by_user(
            user_id=command.user_id,
            reason=command.reason,
            window_minutes=settings.user_cancel_window_minutes,
        )

        restore_inventory(order, reason="order_cancelled")
        repo.add(order)
        logger.info("Order cancelled by owner", order_id=str(order.id), user_id=str(command.user_id))
