"""Admin order deletion — command and handler."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.inventory import restore_inventory
from storefront.order.order import Order

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class DeleteOrderByAdmin:
    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class DeleteOrderHandler:
    @handle(DeleteOrderByAdmin)
    def delete_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.assert_deletable()

        # Cancelled and approved-return orders were restocked already when
        # they reached that state; deleting them restocks again.
        if order.restocks_on_delete:
            restore_inventory(order, reason="order_deleted")

        repo._dao.delete(order)
        logger.info("Order deleted", order_id=str(order.id), status=order.status)
        return "Order deleted successfully"
