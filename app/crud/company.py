"""
CRUD operations for Company model.

Every function takes the request's Session as its first argument and either
returns a Company or raises an AppError subclass that the API layer passes
straight through to the client.
"""

import enum
import logging
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import column_types, query, sql_for_partial_update
from app.models.company import Company
from app.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

# Request field names whose column is named differently
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

IMMUTABLE_FIELDS = ("handle",)


class CompanyFilter(enum.Enum):
    """Shapes of a company search."""
    NAME = "name"
    NAME_AND_RANGE = "name_and_range"
    RANGE = "range"


class CompanyCriteria(NamedTuple):
    name: Optional[str]
    min_employees: int
    max_employees: Optional[int]


def _name_matches(criteria: CompanyCriteria) -> list:
    return [Company.name.icontains(criteria.name, autoescape=True)]


def _employees_in_range(criteria: CompanyCriteria) -> list:
    conditions = [Company.num_employees >= criteria.min_employees]
    if criteria.max_employees is not None:
        conditions.append(Company.num_employees <= criteria.max_employees)
    return conditions


FILTER_CONDITIONS: Dict[CompanyFilter, Callable[[CompanyCriteria], list]] = {
    CompanyFilter.NAME: _name_matches,
    CompanyFilter.NAME_AND_RANGE: lambda c: _name_matches(c) + _employees_in_range(c),
    CompanyFilter.RANGE: _employees_in_range,
}


def create(db: Session, company_data: CompanyCreateRequest) -> Company:
    """
    Create a new company in the database.

    Args:
        db: Database session
        company_data: Validated company creation data

    Returns:
        Created Company instance

    Raises:
        BadRequestError: If a company with the same handle exists
    """
    if db.get(Company, company_data.handle) is not None:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    db_company = Company(
        handle=company_data.handle,
        name=company_data.name,
        description=company_data.description,
        num_employees=company_data.num_employees,
        logo_url=company_data.logo_url,
    )

    db.add(db_company)
    db.commit()
    db.refresh(db_company)

    return db_company


def find_all(db: Session) -> List[Company]:
    """Retrieve all companies ordered by name."""
    return db.query(Company).order_by(Company.name).all()


def filter_shape(name: Optional[str], min_employees: Optional[int], max_employees: Optional[int]) -> CompanyFilter:
    """Pick the search shape for the supplied criteria."""
    # minEmployees=0 is the default, not a bound
    has_range = bool(min_employees) or max_employees is not None
    if name and has_range:
        return CompanyFilter.NAME_AND_RANGE
    if name:
        return CompanyFilter.NAME
    return CompanyFilter.RANGE


def filter_by(
    db: Session,
    name: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> List[Company]:
    """
    Search companies.

    Args:
        db: Database session
        name: Case-insensitive substring of the company name
        min_employees: Lowest employee count to include (default 0)
        max_employees: Highest employee count to include (default unbounded)

    Returns:
        Matching companies ordered by name. Companies without an employee
        count only match searches with no min above 0 and no max.

    Raises:
        BadRequestError: If min_employees is greater than max_employees
    """
    criteria = CompanyCriteria(
        name=name or None,
        min_employees=min_employees or 0,
        max_employees=max_employees,
    )
    if criteria.max_employees is not None and criteria.min_employees > criteria.max_employees:
        raise BadRequestError("Min employees cannot be greater than max employees.")

    shape = filter_shape(name, min_employees, max_employees)
    conditions = FILTER_CONDITIONS[shape](criteria)

    return db.query(Company).filter(*conditions).order_by(Company.name).all()


def get(db: Session, handle: str) -> Company:
    """
    Retrieve a company by handle, with its jobs loaded.

    Raises:
        NotFoundError: If no such company
    """
    company = db.get(Company, handle)
    if company is None:
        raise NotFoundError(f"No company: {handle}")

    # Load the jobs while the session is guaranteed to be open
    company.jobs
    return company


def update(db: Session, handle: str, data: Dict[str, Any]) -> Company:
    """
    Partially update a company.

    Only the fields present in data are changed. Data can include
    {name, description, numEmployees, logoUrl}.

    Raises:
        BadRequestError: If data is empty or tries to change the handle
        NotFoundError: If no such company
    """
    update_sql = sql_for_partial_update(data, JS_TO_SQL)
    if any(field in data for field in IMMUTABLE_FIELDS):
        raise BadRequestError("Company handle cannot be changed")

    result = query(
        db,
        f"UPDATE companies SET {update_sql.set_cols} WHERE handle = {update_sql.next_placeholder}",
        [*update_sql.values, handle],
        column_types(Company.__table__, [*update_sql.columns, "handle"]),
    )
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(update_sql.columns)}")

    return get(db, handle)


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and its jobs.

    Raises:
        NotFoundError: If no such company
    """
    company = db.get(Company, handle)
    if company is None:
        raise NotFoundError(f"No company: {handle}")

    db.delete(company)
    db.commit()
