"""Application tests for carts, notification inboxes and catalogue upkeep."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from storefront.account.registration import RegisterUser
from storefront.cart.management import AddToCart, ClearCart, RemoveFromCart, cart_for_user
from storefront.catalogue.management import RestockProduct
from storefront.catalogue.product import Product
from storefront.notification.management import (
    ClearNotifications,
    DeleteNotification,
    MarkAllNotificationsRead,
    MarkNotificationRead,
    notifications_for_user,
)


def _process(command):
    return current_domain.process(command, asynchronous=False)


class TestRegistration:
    def test_duplicate_email_is_rejected(self, register_user):
        register_user(email="ann@example.com")
        with pytest.raises(ValidationError):
            _process(RegisterUser(full_name="Other Ann", email="ANN@example.com"))


class TestCatalogue:
    def test_restock(self, add_product):
        product_id = add_product(in_stock=1)
        _process(RestockProduct(product_id=product_id, quantity=4))
        assert current_domain.repository_for(Product).get(product_id).in_stock == 5


class TestCart:
    def test_add_prices_item_for_the_users_role(self, register_user, add_product):
        user_id, _ = register_user(role="b2b")
        product_id = add_product(retail_price=100.0, wholesale_price=70.0)

        _process(AddToCart(user_id=user_id, product_id=product_id, quantity=2))

        cart = cart_for_user(user_id)
        assert cart["items"][0]["price"] == 70.0
        assert cart["items"][0]["quantity"] == 2

    def test_add_checks_color(self, register_user, add_product):
        user_id, _ = register_user()
        product_id = add_product(colors=[{"name": "Red", "hex": "#FF0000"}])

        with pytest.raises(ValidationError):
            _process(AddToCart(user_id=user_id, product_id=product_id, quantity=1))

    def test_remove_and_clear(self, register_user, add_product):
        user_id, _ = register_user()
        first = add_product(name="First")
        second = add_product(name="Second")
        item_id = _process(AddToCart(user_id=user_id, product_id=first, quantity=1))
        _process(AddToCart(user_id=user_id, product_id=second, quantity=1))

        _process(RemoveFromCart(user_id=user_id, item_id=item_id))
        assert [i["product_id"] for i in cart_for_user(user_id)["items"]] == [second]

        _process(ClearCart(user_id=user_id))
        assert cart_for_user(user_id)["items"] == []

    def test_remove_from_missing_cart(self, register_user):
        user_id, _ = register_user()
        with pytest.raises(ObjectNotFoundError):
            _process(RemoveFromCart(user_id=user_id, item_id="missing"))

    def test_user_without_cart_sees_empty_cart(self, register_user):
        user_id, _ = register_user()
        assert cart_for_user(user_id) == {"user_id": user_id, "items": []}


class TestNotificationInbox:
    @pytest.fixture()
    def inbox(self, register_user, add_product, place_order):
        """A buyer with one notification per placed order."""
        buyer_id, address_id = register_user()
        product_id = add_product(in_stock=10)
        for _ in range(2):
            place_order(buyer_id, address_id, [{"product_id": product_id, "quantity": 1, "price": 100.0}])
        return buyer_id

    def test_list_newest_first(self, inbox):
        notifications = notifications_for_user(inbox)
        assert len(notifications) == 2
        assert notifications[0]["created_at"] >= notifications[1]["created_at"]
        assert all(n["read"] is False for n in notifications)

    def test_mark_one_read(self, inbox):
        notification_id = notifications_for_user(inbox)[0]["id"]
        _process(MarkNotificationRead(user_id=inbox, notification_id=notification_id))

        assert len(notifications_for_user(inbox, unread_only=True)) == 1

    def test_mark_all_read(self, inbox):
        assert _process(MarkAllNotificationsRead(user_id=inbox)) == 2
        assert notifications_for_user(inbox, unread_only=True) == []

    def test_delete_one(self, inbox):
        notification_id = notifications_for_user(inbox)[0]["id"]
        _process(DeleteNotification(user_id=inbox, notification_id=notification_id))
        assert len(notifications_for_user(inbox)) == 1

    def test_cannot_touch_another_users_notification(self, inbox, register_user):
        other_id, _ = register_user(email="other@example.com")
        notification_id = notifications_for_user(inbox)[0]["id"]

        with pytest.raises(ObjectNotFoundError):
            _process(MarkNotificationRead(user_id=other_id, notification_id=notification_id))

    def test_clear(self, inbox):
        assert _process(ClearNotifications(user_id=inbox)) == 2
        assert notifications_for_user(inbox) == []
