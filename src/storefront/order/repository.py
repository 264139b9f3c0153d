"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_for_user(self, user_id) -> list[Order]:
        """A user's orders, newest first."""
        results = self._dao.query.filter(user_id=str(user_id)).all().items
        return sorted(results, key=lambda o: o.created_at, reverse=True)

    def find_all(self) -> list[Order]:
        """Every order, newest first."""
        results = self._dao.query.all().items
        return sorted(results, key=lambda o: o.created_at, reverse=True)
