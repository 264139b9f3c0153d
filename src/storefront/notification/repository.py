"""Repository for the Notification aggregate."""

from storefront.domain import storefront
from storefront.notification.notification import Notification


@storefront.repository(part_of=Notification)
class NotificationRepository:
    def find_for_user(self, user_id, unread_only: bool = False) -> list[Notification]:
        """A user's notifications, newest first."""
        filters = {"user_id": str(user_id)}
        if unread_only:
            filters["read"] = False
        results = self._dao.query.filter(**filters).all().items
        return sorted(results, key=lambda n: n.created_at, reverse=True)

    def find_for_order(self, order_id) -> list[Notification]:
        return self._dao.query.filter(order_id=str(order_id)).all().items
