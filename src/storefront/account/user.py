"""User aggregate root with Address entity."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, String

from storefront.domain import storefront


class UserRole(Enum):
    """Roles a platform user can hold. The role selects the price tier."""

    ADMIN = "admin"
    B2B = "b2b"
    B2C = "b2c"


@storefront.entity(part_of="User")
class Address:
    """A delivery address in a user's address book."""

    label: String(max_length=50, default="Home")
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    postal_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)


@storefront.aggregate
class User:
    """A registered shopper or administrator."""

    full_name: String(required=True, max_length=150)
    email: String(required=True, max_length=254, unique=True)
    number: String(max_length=20)
    role: String(choices=UserRole, default=UserRole.B2C.value)
    addresses: HasMany(Address)
    registered_at: DateTime()

    @invariant.post
    def addresses_cannot_exceed_maximum(self):
        if len(self.addresses) > 10:
            raise ValidationError({"addresses": ["Cannot have more than 10 addresses"]})

    @classmethod
    def register(cls, full_name, email, number=None, role=UserRole.B2C.value):
        from storefront.account.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            full_name=full_name,
            email=email.strip().lower(),
            number=number,
            role=role,
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def add_address(self, street, city, postal_code, country, label=None, state=None):
        from storefront.account.events import AddressAdded

        address = Address(
            label=label or "Home",
            street=street,
            city=city,
            state=state,
            postal_code=postal_code,
            country=country,
        )
        self.add_addresses(address)

        self.raise_(
            AddressAdded(
                user_id=str(self.id),
                address_id=str(address.id),
                label=address.label,
                city=city,
                country=country,
            )
        )
        return address

    def find_address(self, address_id):
        """Return the address with ``address_id`` from this user's book, or None."""
        return next((a for a in self.addresses if str(a.id) == str(address_id)), None)
