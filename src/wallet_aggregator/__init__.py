"""Multi-wallet portfolio and transaction aggregation service."""

__version__ = "0.1.0"
