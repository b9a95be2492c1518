"""Abstract interface for paper storage."""

from abc import ABC, abstractmethod

from printpress.core.entities.paper import Paper
from printpress.core.entities.stock import StockEntry


class IPaperStore(ABC):
    """Interface for paper persistence. Every call is tenant-scoped."""

    @abstractmethod
    async def create_paper(self, paper: Paper) -> Paper:
        """Create a new paper."""
        pass

    @abstractmethod
    async def get_paper(self, admin_id: str, paper_id: int) -> Paper | None:
        """Get a paper owned by *admin_id*."""
        pass

    @abstractmethod
    async def list_papers(
        self, admin_id: str, limit: int = 100, offset: int = 0
    ) -> list[Paper]:
        """List papers, newest first."""
        pass

    @abstractmethod
    async def update_paper(
        self, paper: Paper, rebalanced: list[StockEntry] | None = None
    ) -> Paper:
        """Update paper attributes.

        *rebalanced* entries, recomputed for a new original stock, are
        written in the same transaction.
        """
        pass

    @abstractmethod
    async def delete_paper(self, admin_id: str, paper_id: int) -> bool:
        """Delete a paper. Returns False if nothing was deleted."""
        pass
