"""EmailAddress value object for validated, normalized email addresses."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from access.domain import access

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@access.value_object
class EmailAddress:
    """An email address in `local@domain.tld` form, stored lowercased."""

    address: String(required=True, max_length=254)

    @classmethod
    def of(cls, raw):
        """Normalize a raw address (trim, lowercase) and build the value object."""
        return cls(address=raw.strip().lower() if isinstance(raw, str) else raw)

    @invariant.post
    def address_must_be_well_formed(self):
        if self.address is not None and not _EMAIL_PATTERN.match(self.address):
            raise ValidationError({"address": [f"Invalid email format: {self.address!r}"]})
