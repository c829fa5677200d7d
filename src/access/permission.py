"""Permission — an immutable (resource, action) capability token."""

from dataclasses import dataclass
from enum import Enum


class ResourceKind(Enum):
    """Kinds of resources a permission can refer to."""

    USER = "user"
    ARTIST = "artist"
    ARTWORK = "artwork"
    PRODUCT = "product"
    ORDER = "order"
    CART = "cart"
    REVIEW = "review"
    ADMIN = "admin"


class ActionKind(Enum):
    """Actions that can be performed on a resource."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    MANAGE = "manage"


@dataclass(frozen=True)
class Permission:
    """Capability to perform `action` on `resource`.

    Equality and hashing are structural on (resource, action). The `name`
    is derived for display and never participates in comparisons.
    """

    resource: ResourceKind
    action: ActionKind

    def __post_init__(self):
        # Accept raw strings ("cart", "read") and coerce to the enums
        if not isinstance(self.resource, ResourceKind):
            object.__setattr__(self, "resource", ResourceKind(self.resource))
        if not isinstance(self.action, ActionKind):
            object.__setattr__(self, "action", ActionKind(self.action))

    @property
    def name(self) -> str:
        return f"{self.resource.value}:{self.action.value}"

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, name: str) -> "Permission":
        """Build a permission from its `resource:action` name."""
        resource, sep, action = name.strip().partition(":")
        if not sep or not resource or not action:
            raise ValueError(f"Malformed permission name: {name!r}")
        return cls(ResourceKind(resource), ActionKind(action))

    # -------------------------------------------------------------------
    # Common permissions
    # -------------------------------------------------------------------
    @classmethod
    def read_user(cls):
        return cls(ResourceKind.USER, ActionKind.READ)

    @classmethod
    def update_user(cls):
        return cls(ResourceKind.USER, ActionKind.UPDATE)

    @classmethod
    def delete_user(cls):
        return cls(ResourceKind.USER, ActionKind.DELETE)

    @classmethod
    def create_artwork(cls):
        return cls(ResourceKind.ARTWORK, ActionKind.CREATE)

    @classmethod
    def read_artwork(cls):
        return cls(ResourceKind.ARTWORK, ActionKind.READ)

    @classmethod
    def create_product(cls):
        return cls(ResourceKind.PRODUCT, ActionKind.CREATE)

    @classmethod
    def read_product(cls):
        return cls(ResourceKind.PRODUCT, ActionKind.READ)

    @classmethod
    def create_order(cls):
        return cls(ResourceKind.ORDER, ActionKind.CREATE)

    @classmethod
    def manage_order(cls):
        return cls(ResourceKind.ORDER, ActionKind.MANAGE)

    @classmethod
    def read_cart(cls):
        return cls(ResourceKind.CART, ActionKind.READ)

    @classmethod
    def update_cart(cls):
        return cls(ResourceKind.CART, ActionKind.UPDATE)

    @classmethod
    def manage_admin(cls):
        return cls(ResourceKind.ADMIN, ActionKind.MANAGE)
