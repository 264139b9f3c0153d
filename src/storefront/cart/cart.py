"""Cart aggregate: the items a user has set aside before checkout.

A user has at most one cart. Placing an order prunes the cart entries the
order consumed; everything else stays put.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved
from storefront.domain import storefront


def _same_color(left, right) -> bool:
    return (left or "").strip().lower() == (right or "").strip().lower()


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    color = String(max_length=50)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    def add_item(self, product_id, quantity, price, color=None):
        """Add an item, or increase the quantity of the same product and colour."""
        existing = next(
            (i for i in self.items if str(i.product_id) == str(product_id) and _same_color(i.color, color)),
            None,
        )

        now = datetime.now(UTC)
        if existing:
            existing.quantity += quantity
            existing.price = price
            item_id = str(existing.id)
        else:
            item = CartItem(
                product_id=product_id,
                color=color,
                quantity=quantity,
                price=price,
                added_at=now,
            )
            self.add_items(item)
            item_id = str(item.id)

        self.updated_at = now
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=item_id,
                product_id=str(product_id),
                color=color,
                quantity=quantity,
            )
        )
        return item_id

    def remove_item(self, item_id):
        item = next((i for i in self.items if str(i.id) == str(item_id)), None)
        if item is None:
            raise ObjectNotFoundError(f"Cart item {item_id} not found")
        self._drop(item)

    def clear(self):
        for item in list(self.items):
            self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id), user_id=str(self.user_id)))

    def prune(self, lines):
        """Drop items matching an ordered line on product, colour and quantity.

        Args:
            lines: Iterable of dicts with ``product_id``, ``color`` and ``quantity``.

        Returns the number of items removed.
        """
        removed = 0
        for line in lines:
            match = next(
                (
                    i
                    for i in self.items
                    if str(i.product_id) == str(line["product_id"])
                    and _same_color(i.color, line.get("color"))
                    and i.quantity == line["quantity"]
                ),
                None,
            )
            if match is not None:
                self._drop(match)
                removed += 1
        return removed

    def _drop(self, item):
        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_id=str(item.id),
            )
        )
