"""Account registration — command and handler."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from access.account.account import Account
from access.domain import access

logger = structlog.get_logger(__name__)


@access.command(part_of="Account")
class RegisterAccount:
    """Register a marketplace account; new accounts are buyers."""

    email: String(required=True, max_length=254)
    username: String(required=True, max_length=30)
    external_id: String(max_length=255)


@access.command_handler(part_of=Account)
class RegisterAccountHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        account = Account.register(
            email=command.email,
            username=command.username,
            external_id=command.external_id,
        )
        current_domain.repository_for(Account).add(account)
        logger.info("Account registered", account_id=str(account.id))
        return str(account.id)
