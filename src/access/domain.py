"""Access bounded context — roles, permissions and authorization decisions.

Owns the role permission table, the authorization engine and the Account
aggregate that records which role tiers a user holds.
"""

from protean.domain import Domain

from access.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

access = Domain(name="access")
