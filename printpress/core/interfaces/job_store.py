"""Abstract interface for job storage."""

from abc import ABC, abstractmethod

from printpress.core.entities.job import Job


class IJobStore(ABC):
    """Interface for job persistence."""

    @abstractmethod
    async def create_job(self, job: Job) -> Job:
        """Create a new job."""
        pass

    @abstractmethod
    async def get_job(self, admin_id: str, job_id: int) -> Job | None:
        """Get a job owned by *admin_id*."""
        pass

    @abstractmethod
    async def list_jobs(
        self, admin_id: str, limit: int = 100, offset: int = 0
    ) -> list[Job]:
        """List jobs, newest first."""
        pass
