"""Repository for the User aggregate."""

from storefront.account.user import User, UserRole
from storefront.domain import storefront


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        results = self._dao.query.filter(email=email.strip().lower()).all().items
        return results[0] if results else None

    def find_admins(self) -> list[User]:
        """All users holding the admin role."""
        return self._dao.query.filter(role=UserRole.ADMIN.value).all().items
