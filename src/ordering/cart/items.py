"""Cart item management — commands and handler."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering
from ordering.shared.money import Money

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    unit_price = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="USD")
    product_name = String(max_length=255)
    artwork_title = String(max_length=255)
    artist_name = String(max_length=255)
    image_url = String(max_length=1000)


@ordering.command(part_of="ShoppingCart")
class UpdateCartQuantity:
    """Set a line's quantity; zero or less removes the line."""

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@ordering.command(part_of="ShoppingCart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_or_create(command.user_id)
        cart.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            unit_price=Money.of(command.unit_price, command.currency or "USD"),
            product_name=command.product_name,
            artwork_title=command.artwork_title,
            artist_name=command.artist_name,
            image_url=command.image_url,
        )
        repo.add(cart)

        logger.info(
            "Item added to cart",
            cart_id=str(cart.id),
            product_id=str(command.product_id),
            quantity=command.quantity,
        )
        return str(cart.id)

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.user_id)
        cart.update_item_quantity(
            product_id=command.product_id,
            quantity=command.quantity,
        )
        repo.add(cart)

        logger.info(
            "Cart quantity updated",
            cart_id=str(cart.id),
            product_id=str(command.product_id),
            quantity=command.quantity,
        )

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get(command.user_id)
        cart.remove_item(product_id=command.product_id)
        repo.add(cart)

        logger.info("Item removed from cart", cart_id=str(cart.id), product_id=str(command.product_id))
