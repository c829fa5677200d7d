"""Cart management — clearing a cart."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering

logger = structlog.get_logger(__name__)


@ordering.command(part_of="ShoppingCart")
class ClearCart:
    """Drop every line from the user's cart."""

    user_id = Identifier(required=True)


@ordering.command_handler(part_of=ShoppingCart)
class ManageCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.find_for_user(command.user_id)
        if cart is None or cart.is_empty:
            logger.info("Cart already empty", user_id=str(command.user_id))
            return

        cart.clear()
        repo.add(cart)
        logger.info("Cart cleared", cart_id=str(cart.id))
