"""Returns — commands and handler.

A delivered order's owner asks for a return; an admin approves it, which
gives the stock back, or disapproves it with a reason.
"""

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.notification.helpers import notify_admins, notify_user
from storefront.order.inventory import restore_inventory
from storefront.order.order import Order


@storefront.command(part_of="Order")
class RequestReturn:
    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    reason = Text()


@storefront.command(part_of="Order")
class ApproveReturn:
    order_id = Identifier(required=True)


@storefront.command(part_of="Order")
class DisapproveReturn:
    order_id = Identifier(required=True)
    reason = Text()


@storefront.command_handler(part_of=Order)
class ReturnsHandler:
    @handle(RequestReturn)
    def request_return(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.request_return(user_id=command.user_id, reason=command.reason)
        repo.add(order)

        order_id = str(order.id)
        context = {"order_id": order_id, "reason": command.reason}
        notify_user(order.user_id, "return_requested", context, order_id=order_id)
        notify_admins("return_requested_admin", context, order_id=order_id)

    @handle(ApproveReturn)
    def approve_return(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.approve_return()
        restore_inventory(order, reason="return_approved")
        repo.add(order)

        notify_user(order.user_id, "return_approved", {"order_id": str(order.id)}, order_id=str(order.id))

    @handle(DisapproveReturn)
    def disapprove_return(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.disapprove_return(reason=command.reason)
        repo.add(order)

        order_id = str(order.id)
        context = {"order_id": order_id, "reason": command.reason}
        notify_user(order.user_id, "return_disapproved", context, order_id=order_id)
        notify_admins("return_disapproved_admin", context, order_id=order_id)
