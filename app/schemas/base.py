"""
Shared Pydantic configuration.

The API speaks camelCase (numEmployees, logoUrl, companyHandle) while the
Python side uses snake_case; every schema converts between the two.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema with camelCase aliases on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    """Base for request bodies: unknown fields are rejected."""
    model_config = ConfigDict(extra="forbid")


class DeletedResponse(BaseModel):
    """Schema for delete responses"""
    deleted: str


def reject_null(v):
    """Validator for optional update fields whose column is NOT NULL."""
    if v is None:
        raise ValueError("may not be null")
    return v
