"""Abstract interface for paper stock ledger storage."""

from abc import ABC, abstractmethod

from printpress.core.entities.paper import Paper
from printpress.core.entities.stock import StockEntry


class IStockStore(ABC):
    """Interface for stock entry persistence.

    The ``*_with_cascade`` methods write the changed row together with the
    later rows whose balances moved, all or nothing. When ``verify`` is
    given, that paper's whole ledger is checked before commit and a bad
    balance raises ``LedgerInvariantError`` with nothing written.
    """

    @abstractmethod
    async def get_entry(self, admin_id: str, entry_id: int) -> StockEntry | None:
        """Get a stock entry owned by *admin_id*."""
        pass

    @abstractmethod
    async def list_entries(
        self, admin_id: str, paper_id: int, newest_first: bool = False
    ) -> list[StockEntry]:
        """List a paper's entries in ledger order, or reversed for display."""
        pass

    @abstractmethod
    async def count_entries(self, admin_id: str, paper_id: int) -> int:
        """Count a paper's entries."""
        pass

    @abstractmethod
    async def insert_with_cascade(
        self, entry: StockEntry, cascade: list[StockEntry], verify: Paper | None = None
    ) -> StockEntry:
        """Insert *entry* and store the recomputed balances of *cascade*."""
        pass

    @abstractmethod
    async def update_with_cascade(
        self, entry: StockEntry, cascade: list[StockEntry], verify: Paper | None = None
    ) -> StockEntry:
        """Update *entry* and store the recomputed balances of *cascade*."""
        pass

    @abstractmethod
    async def delete_with_cascade(
        self,
        admin_id: str,
        entry_id: int,
        cascade: list[StockEntry],
        verify: Paper | None = None,
    ) -> None:
        """Delete an entry and store the recomputed balances of *cascade*."""
        pass
