"""Order confirmation — command and handler."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.notification.helpers import notify_user
from storefront.order.order import Order


@storefront.command(part_of="Order")
class ConfirmOrder:
    order_id = Identifier(required=True)


@storefront.command_handler(part_of=Order)
class ConfirmOrderHandler:
    @handle(ConfirmOrder)
    def confirm_order(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.confirm()
        repo.add(order)

        notify_user(order.user_id, "order_confirmed", {"order_id": str(order.id)}, order_id=str(order.id))
