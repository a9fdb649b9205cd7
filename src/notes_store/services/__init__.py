"""Services subpackage - checkout flow and counters."""
