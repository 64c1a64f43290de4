"""
Typed filter objects for list queries.

These are the validated output of the query-parameter normalizer
(jobly.core.query_params) and mirror its constraints.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# Ceiling of a PostgreSQL integer column
PG_INT_MAX = 2147483647


class CompanyFilters(BaseModel):
    """Filters accepted by GET /companies"""
    name_like: Optional[str] = Field(None, strict=True)
    min_employees: Optional[int] = Field(None, ge=0, le=PG_INT_MAX, strict=True)
    max_employees: Optional[int] = Field(None, ge=0, le=PG_INT_MAX, strict=True)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"


class JobFilters(BaseModel):
    """Filters accepted by GET /jobs"""
    title: Optional[str] = Field(None, strict=True)
    min_salary: Optional[int] = Field(None, ge=0, le=PG_INT_MAX, strict=True)
    has_equity: Optional[bool] = Field(None, strict=True)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"
