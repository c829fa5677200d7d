"""Username value object."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from access.domain import access

_USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]{3,30}$")


@access.value_object
class Username:
    """A public handle: 3-30 letters, digits or underscores."""

    value: String(required=True, max_length=30)

    @classmethod
    def of(cls, raw):
        return cls(value=raw.strip() if isinstance(raw, str) else raw)

    @invariant.post
    def value_must_be_valid_handle(self):
        if self.value is not None and not _USERNAME_PATTERN.match(self.value):
            raise ValidationError(
                {"value": ["Username must be 3-30 characters and contain only letters, numbers, and underscores"]}
            )
