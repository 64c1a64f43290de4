"""
Normalization of raw path and query-string parameters.

Query strings arrive as strings. Before list filters reach the WHERE clause
builders in jobly.core.sql they are decoded, coerced to their real types,
range checked and validated against the filter schemas. The FastAPI
dependencies at the bottom of this module wire this into the routes.
"""

import math
import re
from typing import Any, Dict, Iterable, Mapping, Type, TypeVar, Union
from urllib.parse import unquote_to_bytes

from fastapi import Path, Request
from pydantic import BaseModel, ValidationError

from jobly.core.exceptions import (
    BadRequestError,
    DecodeError,
    InvalidIdentifierError,
    RangeValidationError,
)
from jobly.schemas.filters import PG_INT_MAX, CompanyFilters, JobFilters

# A % that does not start a two-digit hex escape
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Plain decimal or exponent notation only; no inf, nan, hex or digit separators
_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$", re.ASCII)

# Largest integer SQLite can bind; integral ids beyond it stay floats
_INT64_MAX = 2 ** 63 - 1

FiltersT = TypeVar("FiltersT", bound=BaseModel)


def parse_identifier(value: str) -> Union[int, float]:
    """
    Convert a path identifier to a number.

    Integral values come back as int.

    Raises:
        InvalidIdentifierError: If the value is not a number
    """
    if not isinstance(value, str) or not _NUMBER.match(value):
        raise InvalidIdentifierError("id is not a number.")

    number = float(value)
    if not math.isfinite(number):
        raise InvalidIdentifierError("id is not a number.")

    if number.is_integer() and abs(number) <= _INT64_MAX:
        return int(number)
    return number


def decode_text_param(name: str, value: str) -> str:
    """
    Percent-decode a text query parameter, treating + as a space.

    Raises:
        DecodeError: If a % is not followed by two hex digits, or the escapes
            do not form valid UTF-8
    """
    value = value.replace("+", " ")

    if _MALFORMED_ESCAPE.search(value):
        raise DecodeError(f"Can not decode query parameter {name} from URL encoding.")

    try:
        return unquote_to_bytes(value).decode("utf-8")
    except UnicodeDecodeError:
        raise DecodeError(f"Can not decode query parameter {name} from URL encoding.") from None


def parse_int_param(name: str, value: str) -> int:
    """
    Parse a non-negative integer query parameter that fits an integer column.

    Raises:
        RangeValidationError: If the value is not a finite number, is negative,
            exceeds 2147483647 or has a fractional part
    """
    message = f"{name} is not a positive integer between 0 and {PG_INT_MAX}, inclusive."

    if not _NUMBER.match(value):
        raise RangeValidationError(message)

    number = float(value)
    if not math.isfinite(number) or number < 0 or number > PG_INT_MAX or not number.is_integer():
        raise RangeValidationError(message)

    return int(number)


def parse_bool_param(name: str, value: str) -> bool:
    """
    Parse a boolean query parameter. Only "true" and "false" are accepted, in any case.

    Raises:
        BadRequestError: For any other value
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise BadRequestError(f"{name} must be true or false.")


def coerce_query_params(
    params: Mapping[str, str],
    text_fields: Iterable[str] = (),
    int_fields: Iterable[str] = (),
    bool_fields: Iterable[str] = (),
) -> Dict[str, Any]:
    """
    Coerce the recognized fields of a raw query mapping.

    Missing and empty parameters are omitted from the result, as are
    parameters not named in any of the field lists.
    """
    coerced: Dict[str, Any] = {}

    for name in text_fields:
        if params.get(name):
            coerced[name] = decode_text_param(name, params[name])

    for name in int_fields:
        if params.get(name):
            coerced[name] = parse_int_param(name, params[name])

    for name in bool_fields:
        if params.get(name):
            coerced[name] = parse_bool_param(name, params[name])

    return coerced


def validate_filters(schema: Type[FiltersT], data: Mapping[str, Any]) -> FiltersT:
    """Validate coerced filters against their schema, as a 400 on failure."""
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        errors = [f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise BadRequestError(errors) from None


def normalize_company_filters(params: Mapping[str, str]) -> CompanyFilters:
    """Turn raw GET /companies query parameters into CompanyFilters."""
    coerced = coerce_query_params(
        params,
        text_fields=("nameLike",),
        int_fields=("minEmployees", "maxEmployees"),
    )
    return validate_filters(CompanyFilters, coerced)


def normalize_job_filters(params: Mapping[str, str]) -> JobFilters:
    """Turn raw GET /jobs query parameters into JobFilters."""
    coerced = coerce_query_params(
        params,
        text_fields=("title",),
        int_fields=("minSalary",),
        bool_fields=("hasEquity",),
    )
    return validate_filters(JobFilters, coerced)


# FastAPI dependencies

def job_id_param(id: str = Path(..., description="Job ID")) -> Union[int, float]:
    """Path parameter {id} of the job routes, as a number."""
    return parse_identifier(id)


def company_filters(request: Request) -> CompanyFilters:
    return normalize_company_filters(request.query_params)


def job_filters(request: Request) -> JobFilters:
    return normalize_job_filters(request.query_params)
