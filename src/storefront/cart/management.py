"""Cart management — commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.cart.cart import Cart
from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    color = String(max_length=50)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        user = current_domain.repository_for(User).get(command.user_id)
        product = current_domain.repository_for(Product).get(command.product_id)
        product.check_color(command.color)

        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_id) or Cart.create(user_id=command.user_id)
        item_id = cart.add_item(
            product_id=command.product_id,
            color=command.color,
            quantity=command.quantity,
            price=float(product.unit_price_for(user.role)),
        )
        repo.add(cart)
        return item_id

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            raise ObjectNotFoundError(f"Cart item {command.item_id} not found")
        cart.remove_item(command.item_id)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.find_for_user(command.user_id)
        if cart is None:
            return
        cart.clear()
        repo.add(cart)


def cart_for_user(user_id) -> dict:
    """Read-side view of a user's cart. A user without a cart gets an empty one."""
    cart = current_domain.repository_for(Cart).find_for_user(user_id)
    items = list(cart.items) if cart else []
    return {
        "user_id": str(user_id),
        "items": [
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "color": item.color,
                "quantity": item.quantity,
                "price": item.price,
            }
            for item in items
        ],
    }
