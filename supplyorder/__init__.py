"""Supply-chain ordering tools."""

__version__ = "0.1.0"
