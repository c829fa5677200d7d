"""Cart activity — per-cart counters maintained from dispatched cart events.

The cart's id is its owner's id, so `user_id` mirrors `cart_id`.
"""

from datetime import UTC, datetime

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.cart.cart import ShoppingCart
from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved
from ordering.domain import ordering


@ordering.projection
class CartActivity:
    cart_id = Identifier(identifier=True, required=True)
    user_id = Identifier()
    items_added = Integer(default=0)
    items_removed = Integer(default=0)
    times_cleared = Integer(default=0)
    last_event = String(max_length=50)
    last_activity_at = DateTime()


@ordering.projector(projector_for=CartActivity, aggregates=[ShoppingCart])
class CartActivityProjector:
    def _load(self, cart_id):
        repo = current_domain.repository_for(CartActivity)
        try:
            return repo.get(cart_id)
        except ObjectNotFoundError:
            return CartActivity(
                cart_id=cart_id,
                user_id=cart_id,
                items_added=0,
                items_removed=0,
                times_cleared=0,
            )

    def _save(self, activity, event_name):
        activity.last_event = event_name
        activity.last_activity_at = datetime.now(UTC)
        current_domain.repository_for(CartActivity).add(activity)

    @on(CartItemAdded)
    def on_item_added(self, event: CartItemAdded):
        activity = self._load(str(event.cart_id))
        activity.items_added = (activity.items_added or 0) + event.quantity_added
        self._save(activity, "CartItemAdded")

    @on(CartItemRemoved)
    def on_item_removed(self, event: CartItemRemoved):
        activity = self._load(str(event.cart_id))
        activity.items_removed = (activity.items_removed or 0) + 1
        self._save(activity, "CartItemRemoved")

    @on(CartCleared)
    def on_cart_cleared(self, event: CartCleared):
        activity = self._load(str(event.cart_id))
        activity.times_cleared = (activity.times_cleared or 0) + 1
        self._save(activity, "CartCleared")
