"""AccessContext — the explicit, per-process authorization context.

Created once at process start and handed to request handlers. It pairs the
authorization engine with an identity provider and keeps a small principal
cache whose entries carry the time they were loaded. Cached principals are
advisory: callers that need the freshest roles or active flag invalidate
the entry before asking.
"""

import time
from dataclasses import dataclass

import structlog

from access.engine import AuthorizationEngine
from access.principal import Principal
from access.settings import principal_cache_ttl

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    value: Principal
    timestamp: float


class PrincipalCache:
    """TTL cache of principals keyed by user id."""

    def __init__(self, ttl_seconds: float, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, user_id: str) -> Principal | None:
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self.ttl_seconds:
            del self._entries[user_id]
            return None
        return entry.value

    def put(self, user_id: str, principal: Principal) -> None:
        self._entries[user_id] = CacheEntry(value=principal, timestamp=self._clock())

    def invalidate(self, user_id: str) -> bool:
        return self._entries.pop(user_id, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self):
        return len(self._entries)


class AccessContext:
    """Authorization entry point for one process.

    Args:
        identity: IdentityProvider used to load principals.
        engine: AuthorizationEngine; a default engine when omitted.
        ttl_seconds: Principal cache TTL; ACCESS_PRINCIPAL_CACHE_TTL when omitted.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(self, identity, engine=None, ttl_seconds=None, clock=time.monotonic):
        self.identity = identity
        self.engine = engine or AuthorizationEngine()
        ttl = principal_cache_ttl() if ttl_seconds is None else ttl_seconds
        self.cache = PrincipalCache(ttl, clock=clock)

    def principal(self, user_id) -> Principal | None:
        user_id = str(user_id)
        cached = self.cache.get(user_id)
        if cached is not None:
            logger.debug("Principal cache hit", user_id=user_id)
            return cached

        logger.debug("Principal cache miss", user_id=user_id)
        principal = self.identity.find_principal(user_id)
        if principal is not None:
            self.cache.put(user_id, principal)
        return principal

    def invalidate(self, user_id) -> None:
        """Drop the cached principal, e.g. on logout or after a role change."""
        if self.cache.invalidate(str(user_id)):
            logger.info("Principal cache entry invalidated", user_id=str(user_id))

    def clear(self) -> None:
        self.cache.clear()

    def authorize(self, user_id, resource, action) -> bool:
        principal = self.principal(user_id)
        if principal is None:
            return False
        return self.engine.has_resource_access(principal, resource, action)

    def can_access(self, user_id, resource_id, resource_kind) -> bool:
        principal = self.principal(user_id)
        if principal is None:
            return False
        return self.engine.can_access_resource_instance(principal, resource_id, resource_kind)
