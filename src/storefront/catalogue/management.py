"""Catalogue management — commands and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    retail_price: Float(required=True, min_value=0.0)
    wholesale_price: Float(required=True, min_value=0.0)
    retail_discounted_price: Float(default=0.0)
    wholesale_discounted_price: Float(default=0.0)
    in_stock: Integer(default=0, min_value=0)
    colors: Text()  # JSON: list of {"name", "hex"}
    product_image: String(max_length=255)
    images: Text()  # JSON: list of stored filenames


@storefront.command(part_of="Product")
class RestockProduct:
    product_id: Identifier(required=True)
    quantity: Integer(required=True, min_value=1)


@storefront.command_handler(part_of=Product)
class ManageProductsHandler:
    @handle(AddProduct)
    def add_product(self, command):
        colors = json.loads(command.colors) if command.colors else []
        images = json.loads(command.images) if command.images else []

        product = Product.create(
            name=command.name,
            retail_price=command.retail_price,
            wholesale_price=command.wholesale_price,
            retail_discounted_price=command.retail_discounted_price,
            wholesale_discounted_price=command.wholesale_discounted_price,
            in_stock=command.in_stock or 0,
            colors=colors,
            product_image=command.product_image,
            images=images,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)

    @handle(RestockProduct)
    def restock_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.restore_stock(command.quantity, reason="received")
        repo.add(product)
