"""Account status — deactivation and reactivation commands and handler."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from access.account.account import Account
from access.domain import access

logger = structlog.get_logger(__name__)


@access.command(part_of="Account")
class DeactivateAccount:
    account_id: Identifier(required=True)
    reason: String(max_length=500)


@access.command(part_of="Account")
class ReactivateAccount:
    account_id: Identifier(required=True)


@access.command_handler(part_of=Account)
class AccountStatusHandler:
    @handle(DeactivateAccount)
    def deactivate_account(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get(command.account_id)
        account.deactivate(reason=command.reason)
        repo.add(account)
        logger.info("Account deactivated", account_id=str(account.id), reason=command.reason)

    @handle(ReactivateAccount)
    def reactivate_account(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get(command.account_id)
        account.reactivate()
        repo.add(account)
        logger.info("Account reactivated", account_id=str(account.id))
