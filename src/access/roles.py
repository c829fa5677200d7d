"""Role tiers and the permission table derived from them.

The tiers are strictly nested: seller grants extend buyer grants, admin
grants extend seller grants. The table is derived by extension at
construction so that anything added to a lower tier propagates upward.
"""

from enum import Enum

from access.permission import ActionKind as A
from access.permission import Permission
from access.permission import ResourceKind as R


class RoleKind(Enum):
    """Closed set of role tiers."""

    BUYER = "buyer"
    SELLER = "seller"
    ADMIN = "admin"

    @classmethod
    def parse(cls, raw):
        """Map a raw role claim to a RoleKind, or None when unrecognized."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


BUYER_GRANTS = (
    Permission(R.USER, A.READ),
    Permission(R.USER, A.UPDATE),
    Permission(R.ARTWORK, A.READ),
    Permission(R.PRODUCT, A.READ),
    Permission(R.ORDER, A.CREATE),
    Permission(R.ORDER, A.READ),
    Permission(R.CART, A.READ),
    Permission(R.CART, A.UPDATE),
    Permission(R.REVIEW, A.CREATE),
    Permission(R.REVIEW, A.READ),
    Permission(R.REVIEW, A.UPDATE),
)

SELLER_ONLY_GRANTS = (
    Permission(R.ARTWORK, A.CREATE),
    Permission(R.ARTWORK, A.UPDATE),
    Permission(R.ARTWORK, A.DELETE),
    Permission(R.PRODUCT, A.CREATE),
    Permission(R.PRODUCT, A.UPDATE),
    Permission(R.PRODUCT, A.DELETE),
    Permission(R.ORDER, A.MANAGE),
    Permission(R.ARTIST, A.CREATE),
    Permission(R.ARTIST, A.READ),
    Permission(R.ARTIST, A.UPDATE),
)

ADMIN_ONLY_GRANTS = (
    Permission(R.USER, A.DELETE),
    Permission(R.ADMIN, A.MANAGE),
    Permission(R.USER, A.MANAGE),
    Permission(R.ARTIST, A.MANAGE),
    Permission(R.ORDER, A.DELETE),
    Permission(R.REVIEW, A.DELETE),
    Permission(R.REVIEW, A.MANAGE),
)

# Admin is provisioned out-of-band and is never a transition target
ROLE_TRANSITIONS = {
    RoleKind.BUYER: frozenset({RoleKind.SELLER}),
    RoleKind.SELLER: frozenset({RoleKind.BUYER}),
    RoleKind.ADMIN: frozenset({RoleKind.BUYER, RoleKind.SELLER}),
}


def is_valid_role_transition(from_role, to_role) -> bool:
    source = RoleKind.parse(from_role)
    target = RoleKind.parse(to_role)
    if source is None or target is None:
        return False
    return target in ROLE_TRANSITIONS.get(source, frozenset())


class RolePermissionTable:
    """Maps each role tier to the frozenset of permissions it grants."""

    def __init__(
        self,
        buyer_grants=BUYER_GRANTS,
        seller_grants=SELLER_ONLY_GRANTS,
        admin_grants=ADMIN_ONLY_GRANTS,
    ):
        buyer = frozenset(buyer_grants)
        seller = buyer | frozenset(seller_grants)
        admin = seller | frozenset(admin_grants)

        self._grants = {
            RoleKind.BUYER: buyer,
            RoleKind.SELLER: seller,
            RoleKind.ADMIN: admin,
        }

    def get_role_permissions(self, role) -> frozenset[Permission]:
        """Permissions granted by `role`; empty for anything unrecognized."""
        kind = RoleKind.parse(role)
        if kind is None:
            return frozenset()
        return self._grants.get(kind, frozenset())

    def permissions_for_roles(self, roles) -> frozenset[Permission]:
        granted = frozenset()
        for role in roles:
            granted |= self.get_role_permissions(role)
        return granted


default_table = RolePermissionTable()


def get_role_permissions(role) -> frozenset[Permission]:
    return default_table.get_role_permissions(role)
