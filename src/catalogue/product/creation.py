"""Product creation: command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class CreateProduct:
    seller_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    description = String(required=True, max_length=2000)
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=50)
    stock = Integer(default=0, min_value=0)
    images = Text(required=True)  # JSON: list of {url, key}


@catalogue.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        images = json.loads(command.images) if isinstance(command.images, str) else command.images

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            seller_id=command.seller_id,
            stock=command.stock or 0,
            images=images,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_created", product_id=str(product.id), seller_id=str(command.seller_id))
        return str(product.id)
