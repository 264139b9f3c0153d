"""Notification inbox management — commands, handler and read-side query."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.notification.notification import Notification


@storefront.command(part_of="Notification")
class MarkNotificationRead:
    user_id = Identifier(required=True)
    notification_id = Identifier(required=True)


@storefront.command(part_of="Notification")
class MarkAllNotificationsRead:
    user_id = Identifier(required=True)


@storefront.command(part_of="Notification")
class DeleteNotification:
    user_id = Identifier(required=True)
    notification_id = Identifier(required=True)


@storefront.command(part_of="Notification")
class ClearNotifications:
    user_id = Identifier(required=True)


def _owned_notification(repo, notification_id, user_id):
    notification = repo.get(notification_id)
    # Another user's notification is reported as missing
    if str(notification.user_id) != str(user_id):
        raise ObjectNotFoundError(f"Notification {notification_id} not found")
    return notification


@storefront.command_handler(part_of=Notification)
class ManageNotificationsHandler:
    @handle(MarkNotificationRead)
    def mark_read(self, command):
        repo = current_domain.repository_for(Notification)
        notification = _owned_notification(repo, command.notification_id, command.user_id)
        notification.mark_read()
        repo.add(notification)

    @handle(MarkAllNotificationsRead)
    def mark_all_read(self, command):
        repo = current_domain.repository_for(Notification)
        unread = repo.find_for_user(command.user_id, unread_only=True)
        for notification in unread:
            notification.mark_read()
            repo.add(notification)
        return len(unread)

    @handle(DeleteNotification)
    def delete_notification(self, command):
        repo = current_domain.repository_for(Notification)
        notification = _owned_notification(repo, command.notification_id, command.user_id)
        repo._dao.delete(notification)

    @handle(ClearNotifications)
    def clear_notifications(self, command):
        repo = current_domain.repository_for(Notification)
        notifications = repo.find_for_user(command.user_id)
        for notification in notifications:
            repo._dao.delete(notification)
        return len(notifications)


def notifications_for_user(user_id, unread_only: bool = False) -> list[dict]:
    """A user's notifications as plain dicts, newest first."""
    notifications = current_domain.repository_for(Notification).find_for_user(user_id, unread_only=unread_only)
    return [
        {
            "id": str(n.id),
            "order_id": str(n.order_id) if n.order_id else None,
            "message": n.message,
            "type": n.type,
            "read": n.read,
            "created_at": n.created_at.isoformat() if n.created_at else None,
        }
        for n in notifications
    ]
