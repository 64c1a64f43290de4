"""
CRUD operations for companies.
"""

from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import run_query
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import sql_for_partial_update, sql_where_clause_for_companies
from jobly.crud.job import to_job_dict
from jobly.schemas.company import CompanyCreateRequest

# Request field -> column
COLUMNS: Dict[str, str] = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def create(db: Session, company_data: CompanyCreateRequest) -> Dict[str, Any]:
    """
    Create a new company.

    Returns:
        {handle, name, description, num_employees, logo_url}

    Raises:
        BadRequestError: If the handle or name is already taken
    """
    duplicate = run_query(
        db,
        "SELECT handle FROM companies WHERE handle = $1 OR name = $2",
        [company_data.handle, company_data.name],
    ).first()
    if duplicate:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    row = run_query(
        db,
        """INSERT INTO companies (handle, name, description, num_employees, logo_url)
           VALUES ($1, $2, $3, $4, $5)
           RETURNING handle, name, description, num_employees, logo_url""",
        [
            company_data.handle,
            company_data.name,
            company_data.description,
            company_data.num_employees,
            company_data.logo_url,
        ],
    ).mappings().one()
    company = dict(row)
    db.commit()

    return company


def get_multi(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List companies ordered by name, optionally filtered.

    Args:
        db: Database session
        filters: {nameLike, minEmployees, maxEmployees}, all optional

    Raises:
        BadRangeError: If minEmployees > maxEmployees
    """
    where = sql_where_clause_for_companies(filters or {})

    rows = run_query(
        db,
        f"""SELECT handle, name, description, num_employees, logo_url
            FROM companies{where.where_clause}
            ORDER BY name""",
        where.values,
    ).mappings().all()

    return [dict(row) for row in rows]


def get_by_handle(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company and its jobs.

    Returns:
        {handle, name, description, num_employees, logo_url, jobs}
        where jobs is [{id, title, salary, equity}, ...]

    Raises:
        NotFoundError: If the company does not exist
    """
    row = run_query(
        db,
        """SELECT handle, name, description, num_employees, logo_url
           FROM companies
           WHERE handle = $1""",
        [handle],
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No company: {handle}")

    jobs = run_query(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    ).mappings().all()

    company = dict(row)
    company["jobs"] = [to_job_dict(job) for job in jobs]
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company. The handle can not be changed.

    Args:
        db: Database session
        handle: Company to update
        data: Request field -> new value, any of
            {name, description, numEmployees, logoUrl}

    Raises:
        EmptyUpdateError: If there is nothing to update
        BadRequestError: If the new name is already taken
        NotFoundError: If the company does not exist
    """
    set_clause = sql_for_partial_update(data, COLUMNS)
    handle_idx = len(set_clause.values) + 1

    try:
        row = run_query(
            db,
            f"""UPDATE companies
                SET {set_clause.set_cols}
                WHERE handle = ${handle_idx}
                RETURNING handle, name, description, num_employees, logo_url""",
            [*set_clause.values, handle],
        ).mappings().first()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate company name: {data.get('name')}") from None

    if not row:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    db.commit()

    return company


def delete(db: Session, handle: str) -> None:
    """
    Delete a company and, through the foreign key cascade, its jobs.

    Raises:
        NotFoundError: If the company does not exist
    """
    row = run_query(
        db,
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle],
    ).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
