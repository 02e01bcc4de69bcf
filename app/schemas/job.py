from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator
from typing import List, Optional

from app.schemas.base import CamelModel, RequestModel, reject_null


class JobCreateRequest(RequestModel):
    """Schema for creating a new job"""
    title: StrictStr = Field(..., min_length=1)
    salary: Optional[StrictInt] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: StrictStr = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(RequestModel):
    """
    Schema for a partial job update.

    companyHandle is not accepted: a job stays with the company it was
    posted for.
    """
    title: Optional[StrictStr] = Field(None, min_length=1)
    salary: Optional[StrictInt] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class JobResponse(CamelModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str

    model_config = ConfigDict(from_attributes=True)

    @field_validator("equity", mode="before")
    @classmethod
    def format_equity(cls, v):
        """NUMERIC values are sent as plain decimal strings, e.g. "0.25"."""
        if v is None or isinstance(v, str):
            return v
        value = v if isinstance(v, Decimal) else Decimal(str(v))
        return format(value.normalize(), "f")


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]
