"""Storefront bounded context — catalogue, accounts, carts, notifications and orders.

Everything the order workflow touches lives in one domain so that placing an
order, adjusting stock, pruning the cart and notifying users all commit in
the same unit of work.
"""

from protean.domain import Domain

# Domain Composition Root
storefront = Domain(name="storefront")
