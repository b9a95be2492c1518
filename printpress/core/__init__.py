"""Core domain layer - entities, interfaces, ledger rules and exceptions."""

from printpress.core import entities, exceptions, interfaces

__all__ = ["entities", "interfaces", "exceptions"]
