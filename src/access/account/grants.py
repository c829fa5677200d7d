"""Role grant management — commands and handler.

Granting and changing roles is reserved to admins. The self-service
buyer-to-seller upgrade is allowed for any active buyer-only account.
"""

import structlog
from protean import handle
from protean.exceptions import InvalidOperationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from access.account.account import Account
from access.domain import access
from access.engine import AuthorizationEngine
from access.identity.directory import AccountDirectory

logger = structlog.get_logger(__name__)


@access.command(part_of="Account")
class GrantRole:
    """Grant an additional role tier to an account."""

    account_id: Identifier(required=True)
    role: String(required=True, max_length=20)
    assigner_id: Identifier(required=True)


@access.command(part_of="Account")
class ChangeRole:
    """Move an account from one role tier to another."""

    account_id: Identifier(required=True)
    from_role: String(required=True, max_length=20)
    to_role: String(required=True, max_length=20)
    assigner_id: Identifier(required=True)


@access.command(part_of="Account")
class UpgradeToSeller:
    """Self-service upgrade of a buyer account to the seller tier."""

    account_id: Identifier(required=True)


@access.command_handler(part_of=Account)
class ManageRolesHandler:
    engine = AuthorizationEngine()
    directory = AccountDirectory()

    def _ensure_can_assign(self, assigner_id, role):
        assigner = self.directory.find_principal(assigner_id)
        if assigner is None or not self.engine.can_assign_role(assigner, role):
            logger.warning(
                "Role assignment refused",
                assigner_id=str(assigner_id),
                role=role,
            )
            raise InvalidOperationError(f"User {assigner_id} is not allowed to assign roles")

    @handle(GrantRole)
    def grant_role(self, command):
        self._ensure_can_assign(command.assigner_id, command.role)

        repo = current_domain.repository_for(Account)
        account = repo.get(command.account_id)
        account.grant_role(command.role, granted_by=command.assigner_id)
        repo.add(account)

        logger.info("Role granted", account_id=str(account.id), role=command.role)

    @handle(ChangeRole)
    def change_role(self, command):
        self._ensure_can_assign(command.assigner_id, command.to_role)

        repo = current_domain.repository_for(Account)
        account = repo.get(command.account_id)
        account.change_role(command.from_role, command.to_role, changed_by=command.assigner_id)
        repo.add(account)

        logger.info(
            "Role changed",
            account_id=str(account.id),
            from_role=command.from_role,
            to_role=command.to_role,
        )

    @handle(UpgradeToSeller)
    def upgrade_to_seller(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get(command.account_id)
        if not self.engine.can_upgrade_to_seller(account.to_principal()):
            raise InvalidOperationError(f"Account {command.account_id} is not eligible for a seller upgrade")

        account.upgrade_to_seller()
        repo.add(account)

        logger.info("Account upgraded to seller", account_id=str(account.id))
