"""Ownership lookup abstraction — pluggable storage-backed ownership checks."""

from access.settings import ownership_adapter


def build_ownership_lookup(adapter=None):
    """Build the ownership adapter named by ACCESS_OWNERSHIP_ADAPTER.

    Uses InMemoryOwnership by default. Production deployments register
    their own adapter and pass it to the engine directly.
    """
    adapter = adapter or ownership_adapter()
    if adapter == "memory":
        from access.ownership.fake_adapter import InMemoryOwnership

        return InMemoryOwnership()
    raise ValueError(f"Unknown ownership adapter: {adapter}")
