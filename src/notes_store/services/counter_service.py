"""
Counter Service - "students helped" tally shown on the storefront.
"""
import logging
import threading


logger = logging.getLogger(__name__)


class StudentsHelpedCounter:
    """In-memory counter, incremented by the number of units sold on each checkout."""

    def __init__(self, initial: int = 842):
        self._value = int(initial)
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        return self._value

    def increment(self, amount: int = 1) -> int:
        """Add units sold and return the new value."""
        if amount < 0:
            raise ValueError(f"Counter increment must be non-negative, got {amount}")
        with self._lock:
            self._value += amount
            value = self._value
        logger.info("Students helped: +%d -> %d", amount, value)
        return value
