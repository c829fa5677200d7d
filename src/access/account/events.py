"""Domain events for the Account aggregate."""

from protean.fields import DateTime, Identifier, String

from access.domain import access


@access.event(part_of="Account")
class AccountRegistered:
    """A new marketplace account was registered with the buyer role."""

    __version__ = 1

    account_id = Identifier(required=True)
    external_id = String(max_length=255)
    email = String(required=True, max_length=254)
    username = String(required=True, max_length=30)
    registered_at = DateTime(required=True)


@access.event(part_of="Account")
class RoleGranted:
    """An additional role tier was granted to the account."""

    __version__ = 1

    account_id = Identifier(required=True)
    role = String(required=True, max_length=20)
    granted_by = Identifier()
    granted_at = DateTime(required=True)


@access.event(part_of="Account")
class RoleChanged:
    """One role tier was replaced by another along an allowed transition."""

    __version__ = 1

    account_id = Identifier(required=True)
    from_role = String(required=True, max_length=20)
    to_role = String(required=True, max_length=20)
    changed_by = Identifier()
    changed_at = DateTime(required=True)


@access.event(part_of="Account")
class AccountDeactivated:
    """The account was deactivated; its principal is denied everything."""

    __version__ = 1

    account_id = Identifier(required=True)
    reason = String(max_length=500)
    deactivated_at = DateTime(required=True)


@access.event(part_of="Account")
class AccountReactivated:
    """A previously deactivated account was reactivated."""

    __version__ = 1

    account_id = Identifier(required=True)
    reactivated_at = DateTime(required=True)
