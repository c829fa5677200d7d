"""Tests for Principal and mapping identity-provider claims to principals."""

import pytest
from access.principal import Principal, principal_from_claims
from access.roles import RoleKind

NS = "https://artistmarket.com"


class TestPrincipal:
    def test_roles_are_parsed(self):
        principal = Principal(id="u-1", roles=frozenset({"buyer", "SELLER"}))
        assert principal.roles == frozenset({RoleKind.BUYER, RoleKind.SELLER})
        assert principal.is_buyer and principal.is_seller
        assert not principal.is_admin

    def test_id_is_stringified(self):
        assert Principal(id=42).id == "42"

    def test_defaults(self):
        principal = Principal(id="u-1")
        assert principal.is_active is True
        assert principal.roles == frozenset()

    def test_has_role(self):
        principal = Principal(id="u-1", roles=frozenset({"admin"}))
        assert principal.has_role("admin")
        assert principal.has_role(RoleKind.ADMIN)
        assert not principal.has_role("buyer")


class TestPrincipalFromClaims:
    def test_roles_claim(self):
        principal = principal_from_claims({"sub": "auth0|abc", f"{NS}/roles": ["seller"]})
        assert principal.id == "auth0|abc"
        assert principal.roles == frozenset({RoleKind.SELLER})

    def test_missing_roles_means_buyer(self):
        principal = principal_from_claims({"sub": "auth0|abc"})
        assert principal.roles == frozenset({RoleKind.BUYER})

    def test_single_role_string(self):
        principal = principal_from_claims({"sub": "auth0|abc", f"{NS}/roles": "admin"})
        assert principal.roles == frozenset({RoleKind.ADMIN})

    def test_unknown_roles_dropped(self):
        principal = principal_from_claims({"sub": "auth0|abc", f"{NS}/roles": ["buyer", "wizard"]})
        assert principal.roles == frozenset({RoleKind.BUYER})

    def test_active_claim(self):
        principal = principal_from_claims({"sub": "auth0|abc", f"{NS}/active": False})
        assert principal.is_active is False

    def test_custom_namespace(self):
        principal = principal_from_claims(
            {"sub": "auth0|abc", "https://example.test/roles": ["seller"]},
            namespace="https://example.test/",
        )
        assert principal.roles == frozenset({RoleKind.SELLER})

    def test_namespace_from_environment(self, monkeypatch):
        monkeypatch.setenv("ACCESS_CLAIMS_NAMESPACE", "https://env.test")
        principal = principal_from_claims({"sub": "auth0|abc", "https://env.test/roles": ["admin"]})
        assert principal.is_admin

    def test_missing_subject_rejected(self):
        with pytest.raises(ValueError):
            principal_from_claims({f"{NS}/roles": ["buyer"]})
