"""
Helpers that build parameterized SQL fragments.

Every fragment uses $1, $2, ... positional placeholders, numbered in the same
order as the returned values list, and is meant to be embedded in a larger
statement that is then passed to jobly.core.database.run_query.

Values are always bound, never interpolated. Column names, however, ARE
written into the fragment: callers must only pass field names and column
translations that come from application code (a schema with a closed set of
fields plus a static translation table), never raw client keys.
"""

from numbers import Number
from typing import Any, List, Mapping, NamedTuple

from jobly.core.exceptions import BadRangeError, EmptyUpdateError


class SetClause(NamedTuple):
    set_cols: str
    values: List[Any]


class WhereClause(NamedTuple):
    where_clause: str
    values: List[Any]


def sql_for_partial_update(data_to_update: Mapping[str, Any], columns: Mapping[str, str]) -> SetClause:
    """
    Build the SET clause of a partial UPDATE.

    {"firstName": "Aliya", "age": 32} with {"firstName": "first_name"}
    becomes '"first_name"=$1, "age"=$2' and ["Aliya", 32].

    Args:
        data_to_update: Field name -> new value, in the order to emit them.
            None sets the column to NULL; fields that should stay untouched
            must be absent.
        columns: Field name -> column name. Fields without an entry are
            used as the column name unchanged.

    Returns:
        SetClause with the comma-joined assignments and the values to bind

    Raises:
        EmptyUpdateError: If data_to_update is empty
    """
    if not data_to_update:
        raise EmptyUpdateError("No data")

    cols = [
        f'"{columns.get(field) or field}"=${position}'
        for position, field in enumerate(data_to_update, start=1)
    ]

    return SetClause(", ".join(cols), list(data_to_update.values()))


def _is_number(value: Any) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


def _where(predicates: List[str]) -> str:
    # Leading space: appended straight after the FROM clause
    return " WHERE " + " AND ".join(predicates) if predicates else ""


def sql_where_clause_for_companies(filters: Mapping[str, Any]) -> WhereClause:
    """
    Build the WHERE clause for listing companies.

    Recognized filters, emitted in this order:
        nameLike: case-insensitive substring match on name
        minEmployees: num_employees >= value
        maxEmployees: num_employees <= value

    Other keys are ignored. A falsy value (including 0) counts as not
    provided.

    Raises:
        BadRangeError: If both bounds are numbers and minEmployees > maxEmployees
    """
    name_like = filters.get("nameLike")
    min_employees = filters.get("minEmployees")
    max_employees = filters.get("maxEmployees")

    if _is_number(min_employees) and _is_number(max_employees) and min_employees > max_employees:
        raise BadRangeError("minEmployees can not be greater than maxEmployees.")

    predicates: List[str] = []
    values: List[Any] = []

    if name_like:
        values.append(f"%{name_like}%")
        predicates.append(f"name ILIKE ${len(values)}")

    if min_employees:
        values.append(min_employees)
        predicates.append(f"num_employees >= ${len(values)}")

    if max_employees:
        values.append(max_employees)
        predicates.append(f"num_employees <= ${len(values)}")

    return WhereClause(_where(predicates), values)


def sql_where_clause_for_jobs(filters: Mapping[str, Any]) -> WhereClause:
    """
    Build the WHERE clause for listing jobs.

    Recognized filters, emitted in this order:
        title: case-insensitive substring match on title
        minSalary: salary >= value
        hasEquity: only True adds "equity <> 0"; False means no filter

    Other keys are ignored and falsy values count as not provided.
    """
    title = filters.get("title")
    min_salary = filters.get("minSalary")
    has_equity = filters.get("hasEquity")

    predicates: List[str] = []
    values: List[Any] = []

    if title:
        values.append(f"%{title}%")
        predicates.append(f"title ILIKE ${len(values)}")

    if min_salary:
        values.append(min_salary)
        predicates.append(f"salary >= ${len(values)}")

    if has_equity is True:
        values.append(0)
        predicates.append(f"equity <> ${len(values)}")

    return WhereClause(_where(predicates), values)
