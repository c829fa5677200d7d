"""Rating value object — an average star rating shown beside artists and artwork."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean import invariant
from protean.core.value_object import BaseValueObject
from protean.exceptions import ValidationError
from protean.fields import Float

from ordering.domain import ordering

TENTH = Decimal("0.1")


def _to_tenths(value) -> float:
    try:
        return float(Decimal(str(value)).quantize(TENTH, rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError({"value": [f"Invalid rating: {value!r}"]}) from exc


@ordering.value_object
class Rating(BaseValueObject):
    """A rating from 0.0 to 5.0, rounded half-up to one decimal place on construction."""

    value: Float(required=True)

    def __init__(self, *template, **kwargs):
        values = {}
        for item in template:
            values.update(item)
        values.update(kwargs)

        if values.get("value") is not None:
            values["value"] = _to_tenths(values["value"])

        super().__init__(**values)

    @classmethod
    def of(cls, value):
        return cls(value=value)

    @invariant.post
    def value_must_be_in_range(self):
        if self.value is not None and (self.value < 0 or self.value > 5):
            raise ValidationError({"value": ["Rating must be between 0 and 5"]})
