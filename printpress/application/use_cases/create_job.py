"""Create Job Use Case: opens a job under the tenant's next job number."""

from printpress.application.dto.requests import CreateJobRequest
from printpress.config import get_logger
from printpress.core.entities import (
    CounterName,
    Job,
    Principal,
    TenantSettings,
    format_sequence_number,
)
from printpress.core.exceptions import PaperNotFoundError
from printpress.core.interfaces import IJobStore, IPaperStore, ITenantStore

logger = get_logger(__name__)


class CreateJobUseCase:
    """Create a print job numbered from the tenant's job counter."""

    def __init__(
        self,
        job_store: IJobStore | None = None,
        tenant_store: ITenantStore | None = None,
        paper_store: IPaperStore | None = None,
    ):
        self._job_store = job_store
        self._tenant_store = tenant_store
        self._paper_store = paper_store

    async def _get_job_store(self) -> IJobStore:
        if self._job_store is None:
            from printpress.infrastructure.storage.sqlite import get_job_store

            self._job_store = await get_job_store()
        return self._job_store

    async def _get_tenant_store(self) -> ITenantStore:
        if self._tenant_store is None:
            from printpress.infrastructure.storage.sqlite import get_tenant_store

            self._tenant_store = await get_tenant_store()
        return self._tenant_store

    async def _get_paper_store(self) -> IPaperStore:
        if self._paper_store is None:
            from printpress.infrastructure.storage.sqlite import get_paper_store

            self._paper_store = await get_paper_store()
        return self._paper_store

    async def next_job_number(self, admin_id: str) -> str:
        """Increment the job counter and format it with the tenant's prefix."""
        tenant_store = await self._get_tenant_store()
        settings = await tenant_store.get_settings(admin_id) or TenantSettings(
            admin_id=admin_id
        )
        value = await tenant_store.next_counter_value(admin_id, CounterName.JOB)
        return format_sequence_number(settings.prefix_for(CounterName.JOB), value)

    async def execute(self, principal: Principal, request: CreateJobRequest) -> Job:
        admin_id = principal.tenant_id

        if request.paper_id is not None:
            paper_store = await self._get_paper_store()
            if await paper_store.get_paper(admin_id, request.paper_id) is None:
                raise PaperNotFoundError(request.paper_id)

        job = Job(
            admin_id=admin_id,
            job_no=await self.next_job_number(admin_id),
            job_name=request.job_name.strip(),
            client_name=request.client_name,
            job_date=request.job_date,
            delivery_date=request.delivery_date,
            quantity=request.quantity,
            paper_id=request.paper_id,
            remarks=request.remarks,
            created_by=principal.actor,
        )
        job = await (await self._get_job_store()).create_job(job)
        logger.info("create_job_complete", job_id=job.id, job_no=job.job_no)
        return job
