"""Read use cases for jobs."""

from printpress.application.dto.mappers import job_to_response
from printpress.application.dto.responses import JobListResponse
from printpress.core.entities import Job, Principal
from printpress.core.exceptions import JobNotFoundError
from printpress.core.interfaces import IJobStore


class GetJobsUseCase:
    """List the tenant's jobs or fetch one."""

    def __init__(self, job_store: IJobStore | None = None):
        self._job_store = job_store

    async def _get_job_store(self) -> IJobStore:
        if self._job_store is None:
            from printpress.infrastructure.storage.sqlite import get_job_store

            self._job_store = await get_job_store()
        return self._job_store

    async def list_jobs(self, principal: Principal, limit: int = 100, offset: int = 0) -> list[Job]:
        store = await self._get_job_store()
        return await store.list_jobs(principal.tenant_id, limit=limit, offset=offset)

    async def get(self, principal: Principal, job_id: int) -> Job:
        store = await self._get_job_store()
        job = await store.get_job(principal.tenant_id, job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job

    @staticmethod
    def to_list_response(jobs: list[Job]) -> JobListResponse:
        return JobListResponse(jobs=[job_to_response(j) for j in jobs], total=len(jobs))
