"""Print job endpoints."""

from fastapi import APIRouter, Depends, Query, status

from printpress.api.dependencies import (
    get_create_job_use_case,
    get_current_principal,
    get_jobs_use_case,
)
from printpress.application.dto.mappers import job_to_response
from printpress.application.dto.requests import CreateJobRequest
from printpress.application.dto.responses import ErrorResponse, JobListResponse, JobResponse
from printpress.application.use_cases import CreateJobUseCase, GetJobsUseCase
from printpress.core.entities import Principal

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


@router.get("", response_model=JobListResponse)
async def list_jobs(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    principal: Principal = Depends(get_current_principal),
    use_case: GetJobsUseCase = Depends(get_jobs_use_case),
) -> JobListResponse:
    jobs = await use_case.list_jobs(principal, limit=limit, offset=offset)
    return use_case.to_list_response(jobs)


@router.get(
    "/{job_id}",
    response_model=JobResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_job(
    job_id: int,
    principal: Principal = Depends(get_current_principal),
    use_case: GetJobsUseCase = Depends(get_jobs_use_case),
) -> JobResponse:
    return job_to_response(await use_case.get(principal, job_id))


@router.post(
    "",
    response_model=JobResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_job(
    request: CreateJobRequest,
    principal: Principal = Depends(get_current_principal),
    use_case: CreateJobUseCase = Depends(get_create_job_use_case),
) -> JobResponse:
    """Open a job; its number comes from the tenant's job counter."""
    return job_to_response(await use_case.execute(principal, request))
