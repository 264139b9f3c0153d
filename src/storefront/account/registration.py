"""User registration and address book — commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.account.user import User, UserRole
from storefront.domain import storefront


@storefront.command(part_of="User")
class RegisterUser:
    """Create a new user account."""

    full_name: String(required=True, max_length=150)
    email: String(required=True, max_length=254)
    number: String(max_length=20)
    role: String(choices=UserRole, default=UserRole.B2C.value)


@storefront.command(part_of="User")
class AddAddress:
    """Add a new address to a user's address book."""

    user_id: Identifier(required=True)
    label: String(max_length=50)
    street: String(required=True, max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    postal_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)


@storefront.command_handler(part_of=User)
class ManageUsersHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": [f"A user with email {command.email} already exists"]})

        user = User.register(
            full_name=command.full_name,
            email=command.email,
            number=command.number,
            role=command.role or UserRole.B2C.value,
        )
        repo.add(user)
        return str(user.id)

    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        address = user.add_address(
            street=command.street,
            city=command.city,
            postal_code=command.postal_code,
            country=command.country,
            label=command.label,
            state=command.state,
        )
        repo.add(user)
        return str(address.id)
