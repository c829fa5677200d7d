"""Ordering bounded context — the shopping cart.

Owns the ShoppingCart aggregate, its line-item invariants, the checkout
gate that an external order process consults, and the cart activity
projection fed by dispatched cart events.
"""

from protean.domain import Domain

from ordering.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
