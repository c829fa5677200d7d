"""Principal — the authenticated actor evaluated by the authorization engine."""

from dataclasses import dataclass, field

from access.roles import RoleKind
from access.settings import claims_namespace


@dataclass(frozen=True)
class Principal:
    """Actor identity with active status and role set, supplied per call."""

    id: str
    is_active: bool = True
    roles: frozenset = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "id", str(self.id))
        roles = frozenset(r for r in (RoleKind.parse(raw) for raw in self.roles) if r is not None)
        object.__setattr__(self, "roles", roles)

    def has_role(self, role) -> bool:
        return RoleKind.parse(role) in self.roles

    @property
    def is_admin(self) -> bool:
        return RoleKind.ADMIN in self.roles

    @property
    def is_seller(self) -> bool:
        return RoleKind.SELLER in self.roles

    @property
    def is_buyer(self) -> bool:
        return RoleKind.BUYER in self.roles


def principal_from_claims(claims: dict, namespace: str | None = None) -> Principal:
    """Map identity-provider claims to a Principal.

    `sub` becomes the id. `<namespace>/roles` lists raw role names; unknown
    names are dropped and a missing claim means buyer. `<namespace>/active`
    defaults to true.
    """
    namespace = (namespace or claims_namespace()).rstrip("/")

    subject = claims.get("sub")
    if not subject:
        raise ValueError("Claims are missing the 'sub' subject identifier")

    raw_roles = claims.get(f"{namespace}/roles")
    if raw_roles is None:
        raw_roles = [RoleKind.BUYER.value]
    elif isinstance(raw_roles, str):
        raw_roles = [raw_roles]

    is_active = claims.get(f"{namespace}/active", True)

    return Principal(id=subject, is_active=bool(is_active), roles=frozenset(raw_roles))
