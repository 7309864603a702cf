"""Named exchange operations that a client may or may not support."""
from enum import Enum


class Capability(str, Enum):
    """Operation names as they appear in the ccxt ``has`` feature map."""

    TRANSACTIONS = "fetchTransactions"
    POSITIONS = "fetchPositions"
    OPEN_ORDERS = "fetchOpenOrders"

    @property
    def method_name(self) -> str:
        """Snake-case method name on the Python ccxt exchange object."""
        return "".join(f"_{c.lower()}" if c.isupper() else c for c in self.value)
