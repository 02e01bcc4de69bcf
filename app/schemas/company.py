from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator
from typing import List, Optional
from urllib.parse import urlparse

from app.schemas.base import CamelModel, RequestModel, reject_null
from app.schemas.job import JobResponse


def _validate_logo_url(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    parsed = urlparse(v)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("must be an http(s) URL")
    return v


class CompanyCreateRequest(RequestModel):
    """Schema for creating a new company"""
    handle: StrictStr = Field(..., min_length=1, max_length=25)
    name: StrictStr = Field(..., min_length=1)
    description: StrictStr
    num_employees: Optional[StrictInt] = Field(None, ge=0)
    logo_url: Optional[StrictStr] = None

    @field_validator("logo_url")
    @classmethod
    def validate_logo_url(cls, v: Optional[str]) -> Optional[str]:
        return _validate_logo_url(v)


class CompanyUpdateRequest(RequestModel):
    """
    Schema for a partial company update.

    Only the fields present in the request are changed; the handle cannot be
    changed at all.
    """
    name: Optional[StrictStr] = Field(None, min_length=1)
    description: Optional[StrictStr] = None
    num_employees: Optional[StrictInt] = Field(None, ge=0)
    logo_url: Optional[StrictStr] = None

    @field_validator("name", "description")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)

    @field_validator("logo_url")
    @classmethod
    def validate_logo_url(cls, v: Optional[str]) -> Optional[str]:
        return _validate_logo_url(v)


class CompanyResponse(CamelModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CompanyDetailResponse(CompanyResponse):
    """Company with its job postings"""
    jobs: List[JobResponse] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListEnvelope(BaseModel):
    companies: List[CompanyResponse]
