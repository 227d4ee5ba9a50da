"""Product editing: command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class UpdateProduct:
    """Partial update; fields left empty keep their current value."""

    product_id = Identifier(required=True)
    name = String(max_length=100)
    description = String(max_length=2000)
    price = Float(min_value=0.0)
    category = String(max_length=50)
    stock = Integer(min_value=0)
    images = Text()  # JSON: list of {url, key}; replaces every current image


@catalogue.command_handler(part_of=Product)
class UpdateProductHandler:
    @handle(UpdateProduct)
    def update_product(self, command):
        """Returns the storage keys of images the update retired.

        The caller discards them once the update has committed.
        """
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            stock=command.stock,
        )

        retired = []
        if command.images:
            images = json.loads(command.images) if isinstance(command.images, str) else command.images
            retired = product.replace_images(images)

        repo.add(product)
        return retired
