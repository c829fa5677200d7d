"""Checkout hand-off — validate the cart and hand a snapshot of it to the order process.

Creating the order and taking payment belong to the external
checkout process. This handler only enforces the cart-side precondition and
hands over what was in the cart.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class CheckoutCart:
    user_id = Identifier(required=True)


def snapshot(cart):
    """Plain-data view of the cart's lines and totals."""
    total = cart.total_amount
    return {
        "cart_id": str(cart.id),
        "user_id": str(cart.user_id),
        "items": [
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "unit_price": str(item.unit_price.decimal),
                "line_total": str(item.total_price.decimal),
                "product_name": item.product_name,
                "artwork_title": item.artwork_title,
                "artist_name": item.artist_name,
                "image_url": item.image_url,
            }
            for item in cart.items
        ],
        "item_count": cart.item_count,
        "total_amount": str(total.decimal),
        "currency": total.currency,
    }


@ordering.command_handler(part_of=ShoppingCart)
class CheckoutCartHandler:
    @handle(CheckoutCart)
    def checkout_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.get_or_create(command.user_id)

        try:
            cart.validate_for_checkout()
        except ValidationError as exc:
            logger.info("Checkout rejected", user_id=str(command.user_id), reason=str(exc.messages))
            raise

        handed_over = snapshot(cart)
        cart.clear()
        repo.add(cart)

        logger.info(
            "Cart checked out",
            cart_id=handed_over["cart_id"],
            item_count=handed_over["item_count"],
            total_amount=handed_over["total_amount"],
        )
        return handed_over
