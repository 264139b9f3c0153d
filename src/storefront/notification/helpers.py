"""Helpers the order workflow uses to write notifications.

They add notifications through the repository of the current unit of work,
so a notification exists only if the order transition that caused it commits.
"""

import structlog
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.notification.messages import get_message
from storefront.notification.notification import Notification

logger = structlog.get_logger(__name__)


def notify_user(user_id, message_name: str, context: dict, order_id=None) -> str:
    """Write one notification for ``user_id``. Returns its id."""
    template_cls = get_message(message_name)
    notification = Notification.create(
        user_id=str(user_id),
        message=template_cls.render(context),
        notification_type=template_cls.notification_type,
        order_id=order_id,
    )
    current_domain.repository_for(Notification).add(notification)

    logger.info(
        "Notification created",
        user_id=str(user_id),
        order_id=str(order_id) if order_id else None,
        message_name=message_name,
    )
    return str(notification.id)


def notify_admins(message_name: str, context: dict, order_id=None) -> list[str]:
    """Write one notification per admin user. Returns the ids created."""
    admins = current_domain.repository_for(User).find_admins()
    notification_ids = [notify_user(admin.id, message_name, context, order_id=order_id) for admin in admins]

    if not notification_ids:
        logger.warning("No admin users to notify", message_name=message_name, order_id=order_id)
    return notification_ids
