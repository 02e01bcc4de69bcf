"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

import enum
import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import column_types, query, sql_for_partial_update
from app.models.company import Company
from app.models.job import Job
from app.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

# A job stays with the company it was posted for
IMMUTABLE_FIELDS = ("id", "companyHandle", "company_handle")


class JobFilter(enum.Enum):
    """Shapes of a job search. Every shape applies the minimum salary."""
    TITLE_AND_EQUITY = "title_and_equity"
    TITLE = "title"
    EQUITY = "equity"
    SALARY = "salary"


class JobCriteria(NamedTuple):
    title: Optional[str]
    min_salary: int
    has_equity: bool


def _title_matches(criteria: JobCriteria) -> list:
    return [Job.title.icontains(criteria.title, autoescape=True)]


def _has_equity(criteria: JobCriteria) -> list:
    return [Job.equity > 0]


def _salary_at_least(criteria: JobCriteria) -> list:
    return [Job.salary >= criteria.min_salary]


FILTER_CONDITIONS: Dict[JobFilter, Callable[[JobCriteria], list]] = {
    JobFilter.TITLE_AND_EQUITY: lambda c: _title_matches(c) + _has_equity(c) + _salary_at_least(c),
    JobFilter.TITLE: lambda c: _title_matches(c) + _salary_at_least(c),
    JobFilter.EQUITY: lambda c: _has_equity(c) + _salary_at_least(c),
    JobFilter.SALARY: _salary_at_least,
}


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a new job in the database.

    The company existence check and the insert are separate statements.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id

    Raises:
        BadRequestError: If companyHandle does not name an existing company
    """
    if db.get(Company, job_data.company_handle) is None:
        raise BadRequestError(f"Company does not exist: {job_data.company_handle}")

    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=job_data.equity,
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def find_all(db: Session) -> List[Job]:
    """Retrieve all jobs ordered by id."""
    return db.query(Job).order_by(Job.id).all()


def filter_shape(title: Optional[str], has_equity: bool) -> JobFilter:
    """Pick the search shape for the supplied criteria."""
    if title and has_equity:
        return JobFilter.TITLE_AND_EQUITY
    if title:
        return JobFilter.TITLE
    if has_equity:
        return JobFilter.EQUITY
    return JobFilter.SALARY


def filter_by(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
) -> List[Job]:
    """
    Search jobs.

    Args:
        db: Database session
        title: Case-insensitive substring of the job title
        min_salary: Lowest salary to include (default 0)
        has_equity: Only jobs offering equity > 0 when True

    Returns:
        Matching jobs ordered by id. Jobs without a salary never match.
    """
    criteria = JobCriteria(
        title=title or None,
        min_salary=min_salary or 0,
        has_equity=bool(has_equity),
    )

    shape = filter_shape(criteria.title, criteria.has_equity)
    conditions = FILTER_CONDITIONS[shape](criteria)

    return db.query(Job).filter(*conditions).order_by(Job.id).all()


def get(db: Session, job_id: int) -> Job:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no such job
    """
    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError(f"No job with id: {job_id}")
    return job


def update(db: Session, job_id: int, data: Dict[str, Any]) -> Job:
    """
    Partially update a job.

    Data can include {title, salary, equity}; field names are column names.

    Raises:
        BadRequestError: If data is empty or tries to change the company or id
        NotFoundError: If no such job
    """
    update_sql = sql_for_partial_update(data, {})
    rejected = [field for field in IMMUTABLE_FIELDS if field in data]
    if rejected:
        raise BadRequestError(f"Cannot change job field(s): {', '.join(rejected)}")

    result = query(
        db,
        f"UPDATE jobs SET {update_sql.set_cols} WHERE id = {update_sql.next_placeholder}",
        [*update_sql.values, job_id],
        column_types(Job.__table__, [*update_sql.columns, "id"]),
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No job with id: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(update_sql.columns)}")

    return get(db, job_id)


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no such job
    """
    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError(f"No job with id: {job_id}")

    db.delete(job)
    db.commit()
