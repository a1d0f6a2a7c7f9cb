"""Bounds imposed by the storage layer."""

# Largest value a signed 64-bit INTEGER column or bind parameter can hold.
SQL_INTEGER_MAX = 2**63 - 1

__all__ = ["SQL_INTEGER_MAX"]
