"""Money value object for monetary amounts with currency.

Amounts are held to cent precision. Construction rounds half-up from the
decimal form of the input, so `Money(amount=19.995)` is 20.00; arithmetic
is carried out on `Decimal` and rounded the same way. The sign is checked
before rounding, so a sub-cent negative amount is rejected rather than
becoming zero.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean import invariant
from protean.core.value_object import BaseValueObject
from protean.exceptions import ValidationError
from protean.fields import Float, String

from ordering.domain import ordering

CENT = Decimal("0.01")

VALID_CURRENCIES = frozenset(
    {
        "USD",
        "EUR",
        "GBP",
        "JPY",
        "CAD",
        "AUD",
        "CHF",
        "CNY",
        "INR",
        "MXN",
        "BRL",
        "SGD",
        "NZD",
        "SEK",
    }
)


def to_cents(value) -> Decimal:
    """Quantize any numeric input to cents, rounding half-up."""
    try:
        return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError({"amount": [f"Invalid amount: {value!r}"]}) from exc


def _canonical_amount(value) -> float:
    try:
        negative = Decimal(str(value)) < 0
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError({"amount": [f"Invalid amount: {value!r}"]}) from exc
    if negative:
        raise ValidationError({"amount": ["Amount cannot be negative"]})
    return float(to_cents(value))


@ordering.value_object
class Money(BaseValueObject):
    """Value object representing a non-negative monetary amount with currency."""

    amount: Float(required=True, min_value=0.0)
    currency: String(max_length=3, default="USD")

    def __init__(self, *template, **kwargs):
        values = {}
        for item in template:
            values.update(item)
        values.update(kwargs)

        if values.get("amount") is not None:
            values["amount"] = _canonical_amount(values["amount"])

        super().__init__(**values)

    @classmethod
    def of(cls, amount, currency="USD"):
        return cls(amount=amount, currency=currency)

    @classmethod
    def zero(cls, currency="USD"):
        return cls.of(0, currency)

    @invariant.post
    def currency_must_be_valid_iso_4217(self):
        if self.currency not in VALID_CURRENCIES:
            raise ValidationError({"currency": [f"Unsupported currency: {self.currency}"]})

    # -------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------
    @property
    def decimal(self) -> Decimal:
        return Decimal(str(self.amount)).quantize(CENT)

    def _ensure_same_currency(self, other, operation):
        if self.currency != other.currency:
            raise ValidationError(
                {"currency": [f"Cannot {operation} different currencies: {self.currency} and {other.currency}"]}
            )

    def add(self, other):
        self._ensure_same_currency(other, "add")
        return Money.of(self.decimal + other.decimal, self.currency)

    def subtract(self, other):
        self._ensure_same_currency(other, "subtract")
        difference = self.decimal - other.decimal
        if difference < 0:
            raise ValidationError({"amount": ["Subtraction would produce a negative amount"]})
        return Money.of(difference, self.currency)

    def multiply(self, factor):
        return Money.of(self.decimal * Decimal(str(factor)), self.currency)

    # -------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------
    def __lt__(self, other):
        self._ensure_same_currency(other, "compare")
        return self.decimal < other.decimal

    def __le__(self, other):
        self._ensure_same_currency(other, "compare")
        return self.decimal <= other.decimal

    def __gt__(self, other):
        self._ensure_same_currency(other, "compare")
        return self.decimal > other.decimal

    def __ge__(self, other):
        self._ensure_same_currency(other, "compare")
        return self.decimal >= other.decimal

    def __str__(self):
        return f"{self.decimal:.2f} {self.currency}"
