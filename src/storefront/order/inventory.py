"""Stock restoration for orders that give their items back."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product

logger = structlog.get_logger(__name__)


def restore_inventory(order, reason: str) -> dict[str, int]:
    """Put every product quantity of ``order`` back into stock.

    A product removed from the catalogue since the order was placed has no
    stock to restore; it is skipped with a warning.

    Returns the quantities restored per product id.
    """
    repo = current_domain.repository_for(Product)
    restored = {}

    for product_id, quantity in order.quantities_by_product().items():
        try:
            product = repo.get(product_id)
        except ObjectNotFoundError:
            logger.warning(
                "Product missing during stock restore",
                order_id=str(order.id),
                product_id=product_id,
                quantity=quantity,
            )
            continue

        product.restore_stock(quantity, order_id=order.id, reason=reason)
        repo.add(product)
        restored[product_id] = quantity

    logger.info("Inventory restored", order_id=str(order.id), reason=reason, products=len(restored))
    return restored
