"""Account aggregate — a marketplace user and the role tiers granted to them.

The account is the source the identity directory reads to build a
Principal. Role grants change only through the methods below so that the
transition table is honoured on every change.
"""

from datetime import UTC, datetime

from protean import atomic_change
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, String, ValueObject

from access.account.events import (
    AccountDeactivated,
    AccountReactivated,
    AccountRegistered,
    RoleChanged,
    RoleGranted,
)
from access.domain import access
from access.principal import Principal
from access.roles import RoleKind, is_valid_role_transition
from access.shared.email import EmailAddress
from access.shared.username import Username


@access.entity(part_of="Account")
class RoleGrant:
    role: String(required=True, max_length=20, choices=RoleKind)
    granted_at: DateTime()
    granted_by: Identifier()


@access.aggregate
class Account:
    """A registered user with an active flag and a set of role grants."""

    external_id: String(max_length=255)
    email: ValueObject(EmailAddress, required=True)
    username: ValueObject(Username, required=True)
    grants: HasMany(RoleGrant)
    is_active: Boolean(default=True)
    registered_at: DateTime()
    deactivated_at: DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, email, username, external_id=None):
        """Register a new account. Every account starts as a buyer."""
        now = datetime.now(UTC)
        email_vo = EmailAddress.of(email)
        username_vo = Username.of(username)

        account = cls(
            external_id=external_id,
            email=email_vo,
            username=username_vo,
            is_active=True,
            registered_at=now,
        )
        account.add_grants(RoleGrant(role=RoleKind.BUYER.value, granted_at=now))

        account.raise_(
            AccountRegistered(
                account_id=str(account.id),
                external_id=external_id,
                email=email_vo.address,
                username=username_vo.value,
                registered_at=now,
            )
        )
        return account

    # -------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------
    @property
    def roles(self) -> frozenset:
        return frozenset(RoleKind(grant.role) for grant in self.grants)

    def to_principal(self) -> Principal:
        return Principal(id=str(self.id), is_active=bool(self.is_active), roles=self.roles)

    def _grant_for(self, role):
        return next((g for g in self.grants if g.role == role.value), None)

    # -------------------------------------------------------------------
    # Role grants
    # -------------------------------------------------------------------
    def grant_role(self, role, granted_by=None):
        kind = _require_role(role)
        if kind in self.roles:
            raise ValidationError({"role": [f"Account already holds the {kind.value} role"]})

        now = datetime.now(UTC)
        self.add_grants(RoleGrant(role=kind.value, granted_at=now, granted_by=granted_by))

        self.raise_(
            RoleGranted(
                account_id=str(self.id),
                role=kind.value,
                granted_by=str(granted_by) if granted_by else None,
                granted_at=now,
            )
        )

    def change_role(self, from_role, to_role, changed_by=None):
        """Swap one role grant for another along an allowed transition."""
        source = _require_role(from_role)
        target = _require_role(to_role)

        current = self._grant_for(source)
        if current is None:
            raise ValidationError({"role": [f"Account does not hold the {source.value} role"]})
        if target in self.roles:
            raise ValidationError({"role": [f"Account already holds the {target.value} role"]})
        if not is_valid_role_transition(source, target):
            raise ValidationError({"role": [f"Role transition {source.value} -> {target.value} is not allowed"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            self.remove_grants(current)
            self.add_grants(RoleGrant(role=target.value, granted_at=now, granted_by=changed_by))

        self.raise_(
            RoleChanged(
                account_id=str(self.id),
                from_role=source.value,
                to_role=target.value,
                changed_by=str(changed_by) if changed_by else None,
                changed_at=now,
            )
        )

    def upgrade_to_seller(self):
        """Self-service upgrade for active, buyer-only accounts."""
        if not self.is_active:
            raise ValidationError({"is_active": ["Inactive accounts cannot be upgraded"]})
        if self.roles != frozenset({RoleKind.BUYER}):
            raise ValidationError({"role": ["Only buyer accounts can upgrade to seller"]})

        self.change_role(RoleKind.BUYER, RoleKind.SELLER, changed_by=self.id)

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def deactivate(self, reason):
        if not self.is_active:
            raise ValidationError({"is_active": ["Account is already inactive"]})

        now = datetime.now(UTC)
        self.is_active = False
        self.deactivated_at = now

        self.raise_(
            AccountDeactivated(
                account_id=str(self.id),
                reason=reason,
                deactivated_at=now,
            )
        )

    def reactivate(self):
        if self.is_active:
            raise ValidationError({"is_active": ["Account is already active"]})

        now = datetime.now(UTC)
        self.is_active = True
        self.deactivated_at = None

        self.raise_(
            AccountReactivated(
                account_id=str(self.id),
                reactivated_at=now,
            )
        )


def _require_role(role):
    kind = RoleKind.parse(role)
    if kind is None:
        raise ValidationError({"role": [f"Unknown role: {role!r}"]})
    return kind
