"""Paper stock ledger service for a printing press."""

__version__ = "1.0.0"
