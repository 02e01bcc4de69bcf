"""
Company endpoints.

Reads are open to anonymous callers; creating, updating and deleting
companies requires an admin token.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import allowed_query_params, ensure_admin
from app.crud import company as company_crud
from app.schemas.base import DeletedResponse
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailEnvelope,
    CompanyDetailResponse,
    CompanyEnvelope,
    CompanyListEnvelope,
    CompanyResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    """
    Create a company.

    Body: { handle, name, description, numEmployees, logoUrl }
    """
    company = company_crud.create(db, request)
    logger.info(f"Company {company.handle} created by {admin['username']}")

    return CompanyEnvelope(company=CompanyResponse.model_validate(company))


@router.get(
    "",
    response_model=CompanyListEnvelope,
    dependencies=[Depends(allowed_query_params("name", "minEmployees", "maxEmployees"))],
)
def list_companies(
    name: Optional[str] = None,
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db),
):
    """
    List companies ordered by name, optionally filtered.

    Args:
        name: Case-insensitive substring of the company name
        minEmployees: Minimum employee count
        maxEmployees: Maximum employee count (400 if below minEmployees)
    """
    name = name or None
    if name is None and min_employees is None and max_employees is None:
        companies = company_crud.find_all(db)
    else:
        companies = company_crud.filter_by(
            db,
            name=name,
            min_employees=min_employees,
            max_employees=max_employees,
        )

    return CompanyListEnvelope(companies=[CompanyResponse.model_validate(c) for c in companies])


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company and its jobs."""
    company = company_crud.get(db, handle)
    return CompanyDetailEnvelope(company=CompanyDetailResponse.model_validate(company))


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    """
    Partially update a company.

    Body can include: { name, description, numEmployees, logoUrl }
    """
    company = company_crud.update(db, handle, request.model_dump(exclude_unset=True, by_alias=True))
    return CompanyEnvelope(company=CompanyResponse.model_validate(company))


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: dict = Depends(ensure_admin),
):
    """Delete a company together with its jobs."""
    company_crud.remove(db, handle)
    logger.info(f"Company {handle} deleted by {admin['username']}")

    return DeletedResponse(deleted=handle)
