"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A product was added to the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    in_stock: Integer(required=True)
    added_at: DateTime(required=True)


@storefront.event(part_of="Product")
class StockAdjusted:
    """The sellable stock of a product changed.

    ``delta`` is negative when stock leaves with an order and positive when it
    is restored (cancellation, return, deletion) or received.
    """

    __version__ = 1

    product_id: Identifier(required=True)
    delta: Integer(required=True)
    previous_in_stock: Integer(required=True)
    new_in_stock: Integer(required=True)
    order_id: Identifier()
    reason: String(max_length=100)
    adjusted_at: DateTime(required=True)
