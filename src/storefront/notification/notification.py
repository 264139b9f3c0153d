"""Notification aggregate — an in-app message addressed to one user.

Notifications are written as a side effect of order transitions. They never
feed back into the order; the only state they carry is whether the recipient
has read them.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, String, Text

from storefront.domain import storefront
from storefront.notification.events import NotificationCreated, NotificationRead


class NotificationType(Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@storefront.aggregate
class Notification:
    user_id = Identifier(required=True)
    order_id = Identifier()
    message = Text(required=True)
    type = String(choices=NotificationType, default=NotificationType.INFO.value)
    read = Boolean(default=False)
    created_at = DateTime()
    read_at = DateTime()

    @classmethod
    def create(cls, user_id, message, notification_type=NotificationType.INFO.value, order_id=None):
        now = datetime.now(UTC)
        notification = cls(
            user_id=user_id,
            order_id=order_id,
            message=message,
            type=notification_type,
            read=False,
            created_at=now,
        )
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                user_id=str(user_id),
                order_id=str(order_id) if order_id else None,
                notification_type=notification_type,
                created_at=now,
            )
        )
        return notification

    def mark_read(self):
        """Mark as read. Reading an already read notification changes nothing."""
        if self.read:
            return
        now = datetime.now(UTC)
        self.read = True
        self.read_at = now
        self.raise_(
            NotificationRead(
                notification_id=str(self.id),
                user_id=str(self.user_id),
                read_at=now,
            )
        )
