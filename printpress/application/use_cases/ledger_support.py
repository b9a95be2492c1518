"""Helpers shared by the stock entry use cases."""

from collections.abc import Sequence

from printpress.core.entities import StockEntry
from printpress.core.exceptions import JobNotFoundError
from printpress.core.interfaces import IJobStore


def index_by_identity(entries: Sequence[StockEntry], target: StockEntry) -> int:
    """Position of the very object *target*; works for unsaved entries."""
    for index, entry in enumerate(entries):
        if entry is target:
            return index
    raise ValueError("entry is not part of the ledger")


async def resolve_job_snapshot(
    job_store: IJobStore,
    admin_id: str,
    job_id: int,
    job_no: str | None,
    job_name: str | None,
) -> tuple[str | None, str | None]:
    """Job number and name to store on an entry linked to *job_id*.

    Values sent by the client win; missing ones are copied from the job.

    Raises:
        JobNotFoundError: if the job does not belong to the tenant.
    """
    job = await job_store.get_job(admin_id, job_id)
    if job is None:
        raise JobNotFoundError(job_id)
    return job_no or job.job_no, job_name or job.job_name

