"""Repository for the ShoppingCart aggregate — the cart persistence gateway."""

from protean.exceptions import ObjectNotFoundError

from ordering.cart.cart import ShoppingCart
from ordering.domain import ordering


@ordering.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    """Carts are stored under their owning user's id."""

    def find_for_user(self, user_id) -> ShoppingCart | None:
        try:
            return self.get(str(user_id))
        except ObjectNotFoundError:
            return None

    def get_or_create(self, user_id) -> ShoppingCart:
        cart = self.find_for_user(user_id)
        if cart is None:
            cart = ShoppingCart.create(user_id)
        return cart
