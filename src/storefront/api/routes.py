"""FastAPI routes for the Storefront — orders, carts and notifications.

Thin adapters that translate HTTP requests into domain commands and read
views. No business logic beyond deciding who may call what.
"""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.api.dependencies import current_user, ensure_owner_or_admin, require_admin
from storefront.api.schemas import (
    AddToCartRequest,
    CountResponse,
    ItemIdResponse,
    MessageResponse,
    PlaceOrderRequest,
    ReasonRequest,
    StatusResponse,
    UpdateStatusRequest,
)
from storefront.cart.management import AddToCart, ClearCart, RemoveFromCart, cart_for_user
from storefront.notification.management import (
    ClearNotifications,
    DeleteNotification,
    MarkAllNotificationsRead,
    MarkNotificationRead,
    notifications_for_user,
)
from storefront.order.cancellation import CancelOrderByAdmin, CancelOrderByUser
from storefront.order.confirmation import ConfirmOrder
from storefront.order.creation import PlaceOrder
from storefront.order.fulfillment import MarkOrderDelivered, MarkOrderShipped
from storefront.order.queries import all_orders, order_detail, orders_for_user
from storefront.order.removal import DeleteOrderByAdmin
from storefront.order.returns import ApproveReturn, DisapproveReturn, RequestReturn
from storefront.order.status import UpdateOrderStatus


def _process(command):
    return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201)
async def place_order(body: PlaceOrderRequest, user: User = Depends(current_user)) -> dict:
    order_id = _process(
        PlaceOrder(
            user_id=str(user.id),
            role=user.role,
            items=json.dumps([item.model_dump() for item in body.products]),
            address_id=body.address_id,
        )
    )
    return order_detail(order_id)


@order_router.get("/admin")
async def list_all_orders(admin: User = Depends(require_admin)) -> list[dict]:
    return all_orders()


@order_router.get("/user/{user_id}")
async def list_user_orders(user_id: str, user: User = Depends(current_user)) -> list[dict]:
    ensure_owner_or_admin(user, user_id)
    return orders_for_user(user_id)


@order_router.get("/{order_id}")
async def get_order(order_id: str, user: User = Depends(current_user)) -> dict:
    view = order_detail(order_id)
    ensure_owner_or_admin(user, view["user_id"])
    return view


@order_router.patch("/admin/{order_id}")
async def update_order_status(order_id: str, body: UpdateStatusRequest, admin: User = Depends(require_admin)) -> dict:
    _process(UpdateOrderStatus(order_id=order_id, status=body.status))
    return order_detail(order_id)


@order_router.patch("/admin/{order_id}/confirm")
async def confirm_order(order_id: str, admin: User = Depends(require_admin)) -> dict:
    _process(ConfirmOrder(order_id=order_id))
    return order_detail(order_id)


@order_router.patch("/admin/{order_id}/cancel")
async def cancel_order_by_admin(
    order_id: str, body: ReasonRequest | None = None, admin: User = Depends(require_admin)
) -> dict:
    _process(CancelOrderByAdmin(order_id=order_id, reason=body.reason if body else None))
    return order_detail(order_id)


@order_router.patch("/admin/{order_id}/ship")
async def mark_order_shipped(order_id: str, admin: User = Depends(require_admin)) -> dict:
    _process(MarkOrderShipped(order_id=order_id))
    return order_detail(order_id)


@order_router.patch("/admin/{order_id}/deliver")
async def mark_order_delivered(order_id: str, admin: User = Depends(require_admin)) -> dict:
    _process(MarkOrderDelivered(order_id=order_id))
    return order_detail(order_id)


@order_router.patch("/admin/{order_id}/approve-return")
async def approve_return(order_id: str, admin: User = Depends(require_admin)) -> dict:
    _process(ApproveReturn(order_id=order_id))
    return order_detail(order_id)


@order_router.patch("/admin/{order_id}/disapprove-return")
async def disapprove_return(
    order_id: str, body: ReasonRequest | None = None, admin: User = Depends(require_admin)
) -> dict:
    _process(DisapproveReturn(order_id=order_id, reason=body.reason if body else None))
    return order_detail(order_id)


@order_router.patch("/{order_id}/return-request")
async def request_return(order_id: str, body: ReasonRequest | None = None, user: User = Depends(current_user)) -> dict:
    _process(RequestReturn(order_id=order_id, user_id=str(user.id), reason=body.reason if body else None))
    return order_detail(order_id)


@order_router.delete("/admin/{order_id}", response_model=MessageResponse)
async def delete_order_by_admin(order_id: str, admin: User = Depends(require_admin)) -> MessageResponse:
    message = _process(DeleteOrderByAdmin(order_id=order_id))
    return MessageResponse(message=message)


@order_router.delete("/{order_id}")
async def cancel_order_by_user(
    order_id: str, body: ReasonRequest | None = None, user: User = Depends(current_user)
) -> dict:
    _process(CancelOrderByUser(order_id=order_id, user_id=str(user.id), reason=body.reason if body else None))
    return order_detail(order_id)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/carts", tags=["carts"])


@cart_router.get("/me")
async def get_my_cart(user: User = Depends(current_user)) -> dict:
    return cart_for_user(user.id)


@cart_router.post("/me/items", status_code=201, response_model=ItemIdResponse)
async def add_cart_item(body: AddToCartRequest, user: User = Depends(current_user)) -> ItemIdResponse:
    item_id = _process(
        AddToCart(
            user_id=str(user.id),
            product_id=body.product_id,
            color=body.color,
            quantity=body.quantity,
        )
    )
    return ItemIdResponse(item_id=item_id)


@cart_router.delete("/me/items/{item_id}", response_model=StatusResponse)
async def remove_cart_item(item_id: str, user: User = Depends(current_user)) -> StatusResponse:
    _process(RemoveFromCart(user_id=str(user.id), item_id=item_id))
    return StatusResponse()


@cart_router.delete("/me", response_model=StatusResponse)
async def clear_cart(user: User = Depends(current_user)) -> StatusResponse:
    _process(ClearCart(user_id=str(user.id)))
    return StatusResponse()


# ---------------------------------------------------------------------------
# Notification Router
# ---------------------------------------------------------------------------
notification_router = APIRouter(prefix="/notifications", tags=["notifications"])


@notification_router.get("")
async def list_notifications(unread_only: bool = False, user: User = Depends(current_user)) -> list[dict]:
    return notifications_for_user(user.id, unread_only=unread_only)


@notification_router.patch("/read-all", response_model=CountResponse)
async def mark_all_notifications_read(user: User = Depends(current_user)) -> CountResponse:
    count = _process(MarkAllNotificationsRead(user_id=str(user.id)))
    return CountResponse(count=count or 0)


@notification_router.patch("/{notification_id}/read", response_model=StatusResponse)
async def mark_notification_read(notification_id: str, user: User = Depends(current_user)) -> StatusResponse:
    _process(MarkNotificationRead(user_id=str(user.id), notification_id=notification_id))
    return StatusResponse()


@notification_router.delete("/{notification_id}", response_model=StatusResponse)
async def delete_notification(notification_id: str, user: User = Depends(current_user)) -> StatusResponse:
    _process(DeleteNotification(user_id=str(user.id), notification_id=notification_id))
    return StatusResponse()


@notification_router.delete("", response_model=CountResponse)
async def clear_notifications(user: User = Depends(current_user)) -> CountResponse:
    count = _process(ClearNotifications(user_id=str(user.id)))
    return CountResponse(count=count or 0)
