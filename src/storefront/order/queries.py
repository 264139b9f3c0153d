"""Order read side — formatted views for API responses.

Views embed the ordered product's current catalogue fields and turn stored
image filenames into paths under the media URL prefix. The admin listing
also embeds the ordering user.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.catalogue.product import Product
from storefront.config import WorkflowSettings
from storefront.order.order import Order


def media_url(filename, prefix: str):
    if not filename:
        return None
    return f"{prefix}/{str(filename).lstrip('/')}"


class _Lookup:
    """Loads each referenced aggregate once per view."""

    def __init__(self, aggregate_cls):
        self._repo = current_domain.repository_for(aggregate_cls)
        self._cache = {}

    def get(self, identifier):
        key = str(identifier)
        if key not in self._cache:
            try:
                self._cache[key] = self._repo.get(key)
            except ObjectNotFoundError:
                self._cache[key] = None
        return self._cache[key]


def _product_view(product, prefix):
    if product is None:
        return None
    return {
        "id": str(product.id),
        "name": product.name,
        "retail_price": product.retail_price,
        "wholesale_price": product.wholesale_price,
        "retail_discounted_price": product.retail_discounted_price,
        "wholesale_discounted_price": product.wholesale_discounted_price,
        "product_image": media_url(product.product_image, prefix),
        "images": [media_url(name, prefix) for name in product.image_filenames],
    }


def _user_view(user):
    if user is None:
        return None
    return {
        "id": str(user.id),
        "full_name": user.full_name,
        "role": user.role,
        "number": user.number,
    }


def order_view(order, products, prefix, users=None) -> dict:
    address = order.address
    view = {
        "id": str(order.id),
        "user_id": str(order.user_id),
        "status": order.status,
        "reason": order.reason,
        "subtotal": order.subtotal,
        "address": {
            "label": address.label,
            "street": address.street,
            "city": address.city,
            "state": address.state,
            "postal_code": address.postal_code,
            "country": address.country,
        }
        if address
        else None,
        "items": [
            {
                "id": str(line.id),
                "product_id": str(line.product_id),
                "color": line.color,
                "quantity": line.quantity,
                "price": line.price,
                "product": _product_view(products.get(line.product_id), prefix),
            }
            for line in order.ordered_lines
        ],
        "created_at": order.created_at.isoformat() if order.created_at else None,
        "updated_at": order.updated_at.isoformat() if order.updated_at else None,
    }
    if users is not None:
        view["user"] = _user_view(users.get(order.user_id))
    return view


def orders_for_user(user_id) -> list[dict]:
    prefix = WorkflowSettings.from_env().media_url_prefix
    products = _Lookup(Product)
    orders = current_domain.repository_for(Order).find_for_user(user_id)
    return [order_view(order, products, prefix) for order in orders]


def order_detail(order_id) -> dict:
    prefix = WorkflowSettings.from_env().media_url_prefix
    order = current_domain.repository_for(Order).get(order_id)
    return order_view(order, _Lookup(Product), prefix)


def all_orders() -> list[dict]:
    prefix = WorkflowSettings.from_env().media_url_prefix
    products = _Lookup(Product)
    users = _Lookup(User)
    orders = current_domain.repository_for(Order).find_all()
    return [order_view(order, products, prefix, users=users) for order in orders]
