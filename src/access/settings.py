"""Environment-driven settings for the Access domain."""

import os

DEFAULT_PRINCIPAL_CACHE_TTL = 300
DEFAULT_CLAIMS_NAMESPACE = "https://artistmarket.com"


def principal_cache_ttl() -> float:
    """Seconds a cached principal stays fresh (ACCESS_PRINCIPAL_CACHE_TTL)."""
    raw = os.environ.get("ACCESS_PRINCIPAL_CACHE_TTL")
    if raw is None or raw == "":
        return float(DEFAULT_PRINCIPAL_CACHE_TTL)
    ttl = float(raw)
    if ttl < 0:
        raise ValueError(f"ACCESS_PRINCIPAL_CACHE_TTL must be non-negative, got {raw!r}")
    return ttl


def claims_namespace() -> str:
    """Prefix of the custom claims the identity provider issues."""
    return os.environ.get("ACCESS_CLAIMS_NAMESPACE", DEFAULT_CLAIMS_NAMESPACE).rstrip("/")


def ownership_adapter() -> str:
    return os.environ.get("ACCESS_OWNERSHIP_ADAPTER", "memory")
