"""Authorization engine — pure decisions over a principal and a capability.

Every method answers with a boolean. Denial is an outcome, not an error;
callers decide whether a denial becomes a user-visible failure.
"""

import structlog

from access.permission import Permission, ResourceKind
from access.principal import Principal
from access.roles import RoleKind, RolePermissionTable, default_table, is_valid_role_transition

logger = structlog.get_logger(__name__)


class AuthorizationEngine:
    """Resolves permissions and resource-instance access for principals.

    Args:
        table: Role permission table; the module default when omitted.
        ownership: Optional OwnershipLookup consulted for order involvement.
            Without one, non-admin access to orders is denied.
    """

    def __init__(self, table: RolePermissionTable | None = None, ownership=None):
        self.table = table or default_table
        self.ownership = ownership

    # -------------------------------------------------------------------
    # Permission checks
    # -------------------------------------------------------------------
    def get_role_permissions(self, role) -> frozenset[Permission]:
        return self.table.get_role_permissions(role)

    def permissions_for(self, principal: Principal) -> frozenset[Permission]:
        if not principal.is_active:
            return frozenset()
        return self.table.permissions_for_roles(principal.roles)

    def has_permission(self, principal: Principal, permission: Permission) -> bool:
        if not principal.is_active:
            logger.debug("Permission denied to inactive principal", principal_id=principal.id)
            return False

        granted = any(permission in self.table.get_role_permissions(role) for role in principal.roles)
        if not granted:
            logger.debug(
                "Permission denied",
                principal_id=principal.id,
                permission=permission.name,
            )
        return granted

    def has_resource_access(self, principal: Principal, resource, action) -> bool:
        try:
            permission = Permission(resource, action)
        except ValueError:
            # Unknown resource or action names grant nothing
            return False
        return self.has_permission(principal, permission)

    # -------------------------------------------------------------------
    # Resource instances
    # -------------------------------------------------------------------
    def can_access_resource_instance(self, principal: Principal, resource_id, resource_kind) -> bool:
        """Whether the principal may touch one specific resource.

        Artwork and product access is granted to any seller; checking that
        the seller owns the item is left to the ownership port once storage
        exposes it. The active flag is not consulted here; it gates
        permission checks and the seller upgrade.
        """
        kind = _resource_kind(resource_kind)

        if kind in (ResourceKind.USER, ResourceKind.CART):
            # A cart is identified by its owning user's id
            return principal.id == str(resource_id) or principal.is_admin

        if kind in (ResourceKind.ARTWORK, ResourceKind.PRODUCT):
            return principal.is_admin or principal.is_seller

        if kind == ResourceKind.ORDER:
            if principal.is_admin:
                return True
            if self.ownership is None:
                logger.debug("No ownership lookup configured; order access denied", order_id=str(resource_id))
                return False
            return self.ownership.is_involved_in_order(principal.id, str(resource_id))

        return principal.is_admin

    # -------------------------------------------------------------------
    # Role rules
    # -------------------------------------------------------------------
    def can_assign_role(self, assigner: Principal, target_role) -> bool:
        """Only admins may grant roles, whatever the target tier."""
        return assigner.is_admin

    def can_upgrade_to_seller(self, principal: Principal) -> bool:
        return principal.is_active and principal.roles == frozenset({RoleKind.BUYER})

    def can_downgrade_from_seller(self, principal: Principal) -> bool:
        return principal.is_active and principal.is_seller

    def validate_role_transition(self, from_role, to_role) -> bool:
        return is_valid_role_transition(from_role, to_role)


def _resource_kind(raw):
    if isinstance(raw, ResourceKind):
        return raw
    try:
        return ResourceKind(str(raw).strip().lower())
    except ValueError:
        return None
