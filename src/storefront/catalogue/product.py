"""Product aggregate root with ProductColor entity.

Products carry two price tiers (retail and wholesale), each with an optional
discounted variant, an optional colour palette and a sellable stock counter
that the order workflow decrements and restores.
"""

import json
from datetime import UTC, datetime
from decimal import Decimal

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, Text

from storefront.account.user import UserRole
from storefront.catalogue.events import ProductAdded, StockAdjusted
from storefront.domain import storefront
from storefront.shared.money import to_money


@storefront.entity(part_of="Product")
class ProductColor:
    """A colour a product is offered in, identified by name or hex code."""

    name: String(required=True, max_length=50)
    hex: String(required=True, max_length=9)

    def matches(self, value) -> bool:
        if not value:
            return False
        candidate = str(value).strip().lower()
        return candidate in (self.name.strip().lower(), self.hex.strip().lower())


@storefront.aggregate
class Product:
    """A sellable catalogue item."""

    name: String(required=True, max_length=255)
    retail_price: Float(required=True, min_value=0.0)
    wholesale_price: Float(required=True, min_value=0.0)
    retail_discounted_price: Float(default=0.0, min_value=0.0)
    wholesale_discounted_price: Float(default=0.0, min_value=0.0)
    colors: HasMany(ProductColor)
    in_stock: Integer(default=0, min_value=0)
    product_image: String(max_length=255)
    images: Text()  # JSON: list of stored image filenames
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def discounted_prices_cannot_exceed_base_prices(self):
        if self.retail_discounted_price and self.retail_discounted_price > self.retail_price:
            raise ValidationError({"retail_discounted_price": ["Discounted price cannot exceed the retail price"]})
        if self.wholesale_discounted_price and self.wholesale_discounted_price > self.wholesale_price:
            raise ValidationError(
                {"wholesale_discounted_price": ["Discounted price cannot exceed the wholesale price"]}
            )

    @classmethod
    def create(
        cls,
        name,
        retail_price,
        wholesale_price,
        in_stock=0,
        retail_discounted_price=0.0,
        wholesale_discounted_price=0.0,
        colors=None,
        product_image=None,
        images=None,
    ):
        """Create a product.

        Args:
            colors: List of dicts with ``name`` and ``hex``.
            images: List of stored image filenames.
        """
        now = datetime.now(UTC)
        product = cls(
            name=name,
            retail_price=retail_price,
            wholesale_price=wholesale_price,
            retail_discounted_price=retail_discounted_price or 0.0,
            wholesale_discounted_price=wholesale_discounted_price or 0.0,
            colors=[ProductColor(name=c["name"], hex=c["hex"]) for c in (colors or [])],
            in_stock=in_stock,
            product_image=product_image,
            images=json.dumps(images or []),
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                name=name,
                in_stock=in_stock,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def declares_colors(self) -> bool:
        return bool(self.colors)

    @property
    def color_labels(self) -> list[str]:
        return [color.name for color in self.colors]

    def find_color(self, value):
        """Return the declared colour matching ``value`` by name or hex, if any."""
        return next((color for color in self.colors if color.matches(value)), None)

    def check_color(self, value):
        """Reject a colour choice this product cannot be ordered in.

        Products without a palette accept any colour, including none.
        """
        if not self.declares_colors:
            return
        available = ", ".join(self.color_labels)
        if not value:
            raise ValidationError(
                {"color": [f"Color is required for product {self.name} with available colors: {available}"]}
            )
        if self.find_color(value) is None:
            raise ValidationError(
                {"color": [f"Invalid color '{value}' for product {self.name}. Available colors: {available}"]}
            )

    def unit_price_for(self, role) -> Decimal:
        """Authoritative unit price for a buyer holding ``role``.

        Wholesale buyers pay the wholesale tier, everyone else the retail tier.
        A discounted price applies only when it is set and positive.
        """
        if role == UserRole.B2B.value:
            discounted, base = self.wholesale_discounted_price, self.wholesale_price
        else:
            discounted, base = self.retail_discounted_price, self.retail_price
        return to_money(discounted if discounted and discounted > 0 else base)

    @property
    def image_filenames(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def _adjust_stock(self, delta, order_id=None, reason=None):
        previous = self.in_stock or 0
        now = datetime.now(UTC)
        self.in_stock = previous + delta
        self.updated_at = now

        self.raise_(
            StockAdjusted(
                product_id=str(self.id),
                delta=delta,
                previous_in_stock=previous,
                new_in_stock=self.in_stock,
                order_id=str(order_id) if order_id else None,
                reason=reason,
                adjusted_at=now,
            )
        )

    def decrement_stock(self, quantity, order_id=None):
        """Take ``quantity`` units out of sellable stock."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        if quantity > (self.in_stock or 0):
            raise ValidationError(
                {
                    "in_stock": [
                        f"Insufficient stock for product {self.name}. "
                        f"Available: {self.in_stock}, Requested: {quantity}"
                    ]
                }
            )
        self._adjust_stock(-quantity, order_id=order_id, reason="order_placed")

    def restore_stock(self, quantity, order_id=None, reason="order_reverted"):
        """Put ``quantity`` units back into sellable stock."""
        if quantity <= 0:
            raise ValidationError({"quantity": ["Quantity must be positive"]})
        self._adjust_stock(quantity, order_id=order_id, reason=reason)
