"""Tests for the authorization engine's decisions."""

import pytest
from access.engine import AuthorizationEngine
from access.ownership.fake_adapter import InMemoryOwnership
from access.permission import Permission, ResourceKind
from access.principal import Principal


def _principal(user_id="user-1", roles=("buyer",), active=True):
    return Principal(id=user_id, is_active=active, roles=frozenset(roles))


@pytest.fixture
def engine():
    return AuthorizationEngine()


class TestHasPermission:
    def test_buyer_can_update_cart(self, engine):
        assert engine.has_permission(_principal(), Permission.update_cart()) is True

    def test_buyer_cannot_create_product(self, engine):
        assert engine.has_permission(_principal(), Permission.create_product()) is False

    def test_seller_can_create_product(self, engine):
        assert engine.has_permission(_principal(roles=("seller",)), Permission.create_product()) is True

    def test_multiple_roles_union(self, engine):
        principal = _principal(roles=("buyer", "admin"))
        assert engine.has_permission(principal, Permission.manage_admin()) is True

    def test_inactive_principal_has_nothing(self, engine):
        principal = _principal(roles=("admin",), active=False)
        assert engine.has_permission(principal, Permission.read_user()) is False

    def test_principal_without_roles_has_nothing(self, engine):
        assert engine.has_permission(_principal(roles=()), Permission.read_user()) is False

    def test_unknown_roles_are_dropped(self, engine):
        principal = _principal(roles=("superuser",))
        assert principal.roles == frozenset()
        assert engine.has_permission(principal, Permission.read_user()) is False


class TestPermissionsFor:
    def test_active_seller(self, engine):
        assert engine.permissions_for(_principal(roles=("seller",))) == engine.get_role_permissions("seller")

    def test_inactive_principal_is_empty(self, engine):
        assert engine.permissions_for(_principal(active=False)) == frozenset()


class TestHasResourceAccess:
    def test_by_names(self, engine):
        assert engine.has_resource_access(_principal(), "cart", "read") is True
        assert engine.has_resource_access(_principal(), "artwork", "create") is False

    def test_by_kinds(self, engine):
        assert engine.has_resource_access(_principal(roles=("seller",)), ResourceKind.ARTWORK, "create") is True

    def test_unknown_resource_name_denied(self, engine):
        assert engine.has_resource_access(_principal(roles=("admin",)), "spaceship", "read") is False

    def test_unknown_action_name_denied(self, engine):
        assert engine.has_resource_access(_principal(roles=("admin",)), "cart", "teleport") is False


class TestUserAndCartInstances:
    @pytest.mark.parametrize("kind", ["user", "cart"])
    def test_self_access(self, engine, kind):
        assert engine.can_access_resource_instance(_principal("user-1"), "user-1", kind) is True

    @pytest.mark.parametrize("kind", ["user", "cart"])
    def test_other_user_denied(self, engine, kind):
        assert engine.can_access_resource_instance(_principal("user-1"), "user-2", kind) is False

    @pytest.mark.parametrize("kind", ["user", "cart"])
    def test_admin_allowed(self, engine, kind):
        admin = _principal("admin-1", roles=("admin",))
        assert engine.can_access_resource_instance(admin, "user-2", kind) is True

    def test_seller_cannot_open_someone_elses_cart(self, engine):
        seller = _principal("seller-1", roles=("seller",))
        assert engine.can_access_resource_instance(seller, "user-2", "cart") is False

    @pytest.mark.parametrize("kind", ["user", "cart"])
    def test_inactive_self_still_allowed(self, engine, kind):
        assert engine.can_access_resource_instance(_principal("user-1", active=False), "user-1", kind) is True

    def test_inactive_other_user_denied(self, engine):
        assert engine.can_access_resource_instance(_principal("user-1", active=False), "user-2", "cart") is False


class TestArtworkAndProductInstances:
    @pytest.mark.parametrize("kind", ["artwork", "product"])
    def test_any_seller_allowed(self, engine, kind):
        seller = _principal("seller-1", roles=("seller",))
        assert engine.can_access_resource_instance(seller, "art-99", kind) is True

    @pytest.mark.parametrize("kind", ["artwork", "product"])
    def test_admin_allowed(self, engine, kind):
        admin = _principal("admin-1", roles=("admin",))
        assert engine.can_access_resource_instance(admin, "art-99", kind) is True

    @pytest.mark.parametrize("kind", ["artwork", "product"])
    def test_buyer_denied(self, engine, kind):
        assert engine.can_access_resource_instance(_principal(), "art-99", kind) is False


class TestOrderInstances:
    def test_admin_allowed_without_lookup(self, engine):
        admin = _principal("admin-1", roles=("admin",))
        assert engine.can_access_resource_instance(admin, "ord-1", "order") is True

    def test_non_admin_denied_without_lookup(self, engine):
        assert engine.can_access_resource_instance(_principal("user-1"), "ord-1", "order") is False

    def test_buyer_who_placed_the_order(self):
        ownership = InMemoryOwnership()
        ownership.register_order("ord-1", buyer_id="user-1", seller_ids=["seller-1"])
        engine = AuthorizationEngine(ownership=ownership)

        assert engine.can_access_resource_instance(_principal("user-1"), "ord-1", "order") is True

    def test_seller_fulfilling_the_order(self):
        ownership = InMemoryOwnership()
        ownership.register_order("ord-1", buyer_id="user-1", seller_ids=["seller-1"])
        engine = AuthorizationEngine(ownership=ownership)

        seller = _principal("seller-1", roles=("seller",))
        assert engine.can_access_resource_instance(seller, "ord-1", "order") is True

    def test_uninvolved_user_denied(self):
        ownership = InMemoryOwnership()
        ownership.register_order("ord-1", buyer_id="user-1", seller_ids=["seller-1"])
        engine = AuthorizationEngine(ownership=ownership)

        seller = _principal("seller-2", roles=("seller",))
        assert engine.can_access_resource_instance(seller, "ord-1", "order") is False


class TestOtherInstances:
    @pytest.mark.parametrize("kind", ["review", "artist", "admin", "spaceship"])
    def test_admin_only(self, engine, kind):
        admin = _principal("admin-1", roles=("admin",))
        seller = _principal("seller-1", roles=("seller",))
        assert engine.can_access_resource_instance(admin, "x-1", kind) is True
        assert engine.can_access_resource_instance(seller, "x-1", kind) is False


class TestRoleRules:
    @pytest.mark.parametrize("target", ["buyer", "seller", "admin"])
    def test_admin_can_assign_any_role(self, engine, target):
        assert engine.can_assign_role(_principal(roles=("admin",)), target) is True

    @pytest.mark.parametrize("roles", [("buyer",), ("seller",), ("buyer", "seller")])
    def test_non_admin_cannot_assign(self, engine, roles):
        assert engine.can_assign_role(_principal(roles=roles), "buyer") is False

    def test_inactive_admin_can_still_assign(self, engine):
        assert engine.can_assign_role(_principal(roles=("admin",), active=False), "seller") is True

    def test_buyer_only_can_upgrade(self, engine):
        assert engine.can_upgrade_to_seller(_principal()) is True

    @pytest.mark.parametrize("roles", [("seller",), ("admin",), ("buyer", "seller"), ()])
    def test_others_cannot_upgrade(self, engine, roles):
        assert engine.can_upgrade_to_seller(_principal(roles=roles)) is False

    def test_inactive_buyer_cannot_upgrade(self, engine):
        assert engine.can_upgrade_to_seller(_principal(active=False)) is False

    def test_seller_can_downgrade(self, engine):
        assert engine.can_downgrade_from_seller(_principal(roles=("seller",))) is True
        assert engine.can_downgrade_from_seller(_principal()) is False

    def test_validate_role_transition(self, engine):
        assert engine.validate_role_transition("buyer", "seller") is True
        assert engine.validate_role_transition("seller", "admin") is False
