"""In-memory ownership adapter — deterministic lookups for tests and development."""

from access.ownership.port import OwnershipLookup


class InMemoryOwnership(OwnershipLookup):
    """Ownership records kept in dictionaries, registered explicitly."""

    def __init__(self):
        self._owners: dict[tuple[str, str], str] = {}
        self._orders: dict[str, tuple[str, frozenset[str]]] = {}

    def register_owner(self, resource_id, kind, owner_id):
        self._owners[(str(kind), str(resource_id))] = str(owner_id)

    def register_order(self, order_id, buyer_id, seller_ids=()):
        self._orders[str(order_id)] = (str(buyer_id), frozenset(str(s) for s in seller_ids))
        self.register_owner(order_id, "order", buyer_id)

    def owner_of(self, resource_id, kind):
        return self._owners.get((str(kind), str(resource_id)))

    def is_involved_in_order(self, user_id, order_id):
        record = self._orders.get(str(order_id))
        if record is None:
            return False
        buyer_id, seller_ids = record
        return str(user_id) == buyer_id or str(user_id) in seller_ids

    def reset(self):
        self._owners.clear()
        self._orders.clear()
