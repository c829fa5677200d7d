"""Shopping Cart aggregate — one mutable cart per user, keyed by the user's id.

The cart owns its line items and is their only writer. Every change goes
through the methods below, which validate the whole change before touching
state: a rejected call leaves the lines and `updated_at` exactly as they
were. Adding, removing and clearing record events that the unit of work
dispatches after the cart is saved.
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, ValueObject

from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved
from ordering.domain import ordering
from ordering.shared.money import Money

MAX_ITEM_QUANTITY = 10
MIN_ORDER_AMOUNT = Decimal("1.00")
MAX_ORDER_AMOUNT = Decimal("10000.00")


class CheckoutRejection(Enum):
    """Reasons a cart cannot proceed to checkout, surfaced verbatim."""

    EMPTY = "Cart is empty"
    BELOW_MINIMUM = "Minimum order amount is $1.00"
    ABOVE_MAXIMUM = "Maximum order amount is $10,000.00"


@ordering.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, max_value=MAX_ITEM_QUANTITY)
    unit_price = ValueObject(Money, required=True)
    product_name = String(max_length=255)
    artwork_title = String(max_length=255)
    artist_name = String(max_length=255)
    image_url = String(max_length=1000)
    added_at = DateTime()

    @property
    def total_price(self):
        return self.unit_price.multiply(self.quantity)


@ordering.aggregate
class ShoppingCart:
    user_id = Identifier(required=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in the cart"]})

    @invariant.post
    def lines_share_one_currency(self):
        currencies = {item.unit_price.currency for item in self.items if item.unit_price}
        if len(currencies) > 1:
            raise ValidationError({"items": ["All cart lines must be priced in one currency"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        """Create an empty cart. The cart's id is the owning user's id."""
        now = datetime.now(UTC)
        return cls(
            id=str(user_id),
            user_id=str(user_id),
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Derived state (recomputed on every read)
    # -------------------------------------------------------------------
    @property
    def is_empty(self):
        return not self.items

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    @property
    def currency(self):
        return self.items[0].unit_price.currency if self.items else "USD"

    @property
    def total_amount(self):
        total = Money.zero(self.currency)
        for item in self.items:
            total = total.add(item.total_price)
        return total

    def get_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def has_item(self, product_id):
        return self.get_item(product_id) is not None

    def _require_item(self, product_id):
        item = self.get_item(product_id)
        if item is None:
            raise ObjectNotFoundError({"product_id": [f"Product {product_id} is not in the cart"]})
        return item

    def _touch(self):
        now = datetime.now(UTC)
        previous = self.updated_at
        if previous is not None:
            if previous.tzinfo is None:
                previous = previous.replace(tzinfo=UTC)
            if now <= previous:
                now = previous + timedelta(microseconds=1)
        self.updated_at = now

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(
        self,
        product_id,
        quantity,
        unit_price,
        product_name=None,
        artwork_title=None,
        artist_name=None,
        image_url=None,
    ):
        """Add units of a product, merging with an existing line.

        The merged quantity is checked against the per-item cap as a single
        check; exceeding it rejects the whole call.
        """
        _validate_quantity(quantity)
        if not isinstance(unit_price, Money):
            raise ValidationError({"unit_price": ["Unit price must be a Money value"]})

        if self.items and unit_price.currency != self.currency:
            raise ValidationError(
                {"currency": [f"Cart is priced in {self.currency}, cannot add an item priced in {unit_price.currency}"]}
            )

        existing = self.get_item(product_id)
        if existing is not None:
            new_quantity = existing.quantity + quantity
            if new_quantity > MAX_ITEM_QUANTITY:
                raise ValidationError({"quantity": [f"Maximum quantity per item is {MAX_ITEM_QUANTITY}"]})
            existing.quantity = new_quantity
        else:
            self.add_items(
                CartItem(
                    product_id=product_id,
                    quantity=quantity,
                    unit_price=unit_price,
                    product_name=product_name,
                    artwork_title=artwork_title,
                    artist_name=artist_name,
                    image_url=image_url,
                    added_at=datetime.now(UTC),
                )
            )

        self._touch()

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity_added=quantity,
            )
        )

    def update_item_quantity(self, product_id, quantity):
        """Set a line's quantity. Zero or less removes the line."""
        item = self._require_item(product_id)

        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise ValidationError({"quantity": ["Quantity must be a whole number"]})

        if quantity <= 0:
            self.remove_item(product_id)
            return

        if quantity > MAX_ITEM_QUANTITY:
            raise ValidationError({"quantity": [f"Maximum quantity per item is {MAX_ITEM_QUANTITY}"]})

        item.quantity = quantity
        self._touch()

    def remove_item(self, product_id):
        item = self._require_item(product_id)

        self.remove_items(item)
        self._touch()

        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
            )
        )

    def clear(self):
        """Drop every line. Clearing an empty cart does nothing."""
        if self.is_empty:
            return

        with atomic_change(self):
            for item in list(self.items):
                self.remove_items(item)

        self._touch()

        self.raise_(CartCleared(cart_id=str(self.id)))

    # -------------------------------------------------------------------
    # Checkout gate
    # -------------------------------------------------------------------
    def checkout_rejection(self):
        """The reason the cart cannot be checked out, or None when it can."""
        if self.is_empty:
            return CheckoutRejection.EMPTY

        total = self.total_amount.decimal
        if total < MIN_ORDER_AMOUNT:
            return CheckoutRejection.BELOW_MINIMUM
        if total > MAX_ORDER_AMOUNT:
            return CheckoutRejection.ABOVE_MAXIMUM
        return None

    def validate_for_checkout(self):
        """Read-only precondition gate for an external checkout process."""
        rejection = self.checkout_rejection()
        if rejection is not None:
            raise ValidationError({"cart": [rejection.value]})


def _validate_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError({"quantity": ["Quantity must be a whole number"]})
    if quantity <= 0:
        raise ValidationError({"quantity": ["Quantity must be greater than zero"]})
    if quantity > MAX_ITEM_QUANTITY:
        raise ValidationError({"quantity": [f"Maximum quantity per item is {MAX_ITEM_QUANTITY}"]})
