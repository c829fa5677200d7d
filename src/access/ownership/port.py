"""Ownership port — abstract lookup of who owns or is involved in a resource.

The authorization engine programs against this port; adapters backed by
the marketplace's storage are supplied by the surrounding application.
"""

from abc import ABC, abstractmethod


class OwnershipLookup(ABC):
    """Abstract interface for ownership adapters."""

    @abstractmethod
    def owner_of(self, resource_id: str, kind: str) -> str | None:
        """Return the id of the user owning the resource, or None if unknown."""
        ...

    @abstractmethod
    def is_involved_in_order(self, user_id: str, order_id: str) -> bool:
        """Whether the user placed the order or is a seller fulfilling it."""
        ...
