import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import allowed_query_params, ensure_admin
from app.crud import job as job_crud
from app.schemas.base import DeletedResponse
from app.schemas.job import (
    JobCreateRequest,
    JobEnvelope,
    JobListEnvelope,
    JobResponse,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    """
    Create a job posting for an existing company.

    Body: { title, salary, equity, companyHandle }

    Returns 400 if companyHandle does not name a company.
    """
    new_job = job_crud.create(db, request)
    logger.info(f"Created job {new_job.id}: {new_job.title} ({new_job.company_handle})")

    return JobEnvelope(job=JobResponse.model_validate(new_job))


@router.get(
    "",
    response_model=JobListEnvelope,
    dependencies=[Depends(allowed_query_params("title", "minSalary", "hasEquity"))],
)
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    """
    List jobs ordered by id, optionally filtered.

    Args:
        title: Case-insensitive substring of the job title
        minSalary: Minimum salary
        hasEquity: true to only list jobs with non-zero equity
    """
    title = title or None
    if title is None and min_salary is None and has_equity is None:
        jobs = job_crud.find_all(db)
    else:
        jobs = job_crud.filter_by(db, title=title, min_salary=min_salary, has_equity=has_equity)

    return JobListEnvelope(jobs=[JobResponse.model_validate(j) for j in jobs])


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    job = job_crud.get(db, job_id)
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    """
    Partially update a job.

    Body can include: { title, salary, equity }. Sending companyHandle is a 400.
    """
    job = job_crud.update(db, job_id, request.model_dump(exclude_unset=True, by_alias=True))
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.delete("/{job_id}", response_model=DeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    """
    Delete a job by ID.
    """
    job_crud.remove(db, job_id)
    logger.info(f"Deleted job {job_id}")

    return DeletedResponse(deleted=str(job_id))
