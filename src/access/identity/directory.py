"""Account directory — identity adapter backed by the Account repository."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from access.account.account import Account
from access.identity.port import IdentityProvider

logger = structlog.get_logger(__name__)


class AccountDirectory(IdentityProvider):
    """Builds principals from persisted accounts in the active domain context."""

    def find_principal(self, user_id):
        try:
            account = current_domain.repository_for(Account).get(str(user_id))
        except ObjectNotFoundError:
            logger.debug("No account found for principal lookup", user_id=str(user_id))
            return None
        return account.to_principal()
