"""ParrotWings balance-transfer server."""

__version__ = "0.3.0"
