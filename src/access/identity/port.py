"""Identity port — supplies principals for authenticated users.

The core never authenticates credentials; it only asks the identity
collaborator who a user is and which role tiers they hold.
"""

from abc import ABC, abstractmethod

from access.principal import Principal


class IdentityProvider(ABC):
    """Abstract interface for identity adapters."""

    @abstractmethod
    def find_principal(self, user_id: str) -> Principal | None:
        """Return the principal for the user, or None when unknown."""
        ...

    def find_principal_roles(self, user_id: str) -> frozenset:
        """Role tiers currently held by the user; empty when unknown."""
        principal = self.find_principal(user_id)
        return principal.roles if principal is not None else frozenset()
