"""
CRUD operations for jobs.

Queries are plain SQL templates executed through run_query. Filtering and
partial updates go through the fragment builders in jobly.core.sql.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from sqlalchemy.orm import Session

from jobly.core.database import run_query
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import sql_for_partial_update, sql_where_clause_for_jobs
from jobly.schemas.job import JobCreateRequest

# Request field -> column. Job fields share their column names.
COLUMNS: Dict[str, str] = {}

# Fields that can never be changed by an update
IMMUTABLE_FIELDS = ("id", "companyHandle")

JobId = Union[int, float]


def to_job_dict(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy a result row, returning NUMERIC equity as a float."""
    job = dict(row)
    if job.get("equity") is not None:
        job["equity"] = float(job["equity"])
    return job


def create(db: Session, job_data: JobCreateRequest) -> Dict[str, Any]:
    """
    Create a new job.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        {id, title, salary, equity, company_handle}

    Raises:
        BadRequestError: If an identical job already exists
        NotFoundError: If the company does not exist
    """
    values = [job_data.title, job_data.salary, job_data.equity, job_data.company_handle]

    duplicate = run_query(
        db,
        """SELECT id
           FROM jobs
           WHERE title = $1
             AND (salary = $2 OR (salary IS NULL AND $2 IS NULL))
             AND (equity = $3 OR (equity IS NULL AND $3 IS NULL))
             AND company_handle = $4""",
        values,
    ).first()
    if duplicate:
        raise BadRequestError(f"Duplicate job: {job_data.title}")

    company = run_query(
        db, "SELECT handle FROM companies WHERE handle = $1", [job_data.company_handle]
    ).first()
    if not company:
        raise NotFoundError(f"Company not found for handle: {job_data.company_handle}.")

    row = run_query(
        db,
        """INSERT INTO jobs (title, salary, equity, company_handle)
           VALUES ($1, $2, $3, $4)
           RETURNING id, title, salary, equity, company_handle""",
        values,
    ).mappings().one()
    job = to_job_dict(row)
    db.commit()

    return job


def get_multi(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List jobs ordered by id, optionally filtered.

    Args:
        db: Database session
        filters: {title, minSalary, hasEquity}, all optional

    Returns:
        List of {id, title, salary, equity, company_handle}
    """
    where = sql_where_clause_for_jobs(filters or {})

    rows = run_query(
        db,
        f"""SELECT id, title, salary, equity, company_handle
            FROM jobs{where.where_clause}
            ORDER BY id""",
        where.values,
    ).mappings().all()

    return [to_job_dict(row) for row in rows]


def get_by_id(db: Session, job_id: JobId) -> Dict[str, Any]:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If the job does not exist
    """
    row = run_query(
        db,
        """SELECT id, title, salary, equity, company_handle
           FROM jobs
           WHERE id = $1""",
        [job_id],
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No job: {job_id}")

    return to_job_dict(row)


def update(db: Session, job_id: JobId, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job. The id and company handle can not be changed.

    Args:
        db: Database session
        job_id: Job ID to update
        data: Request field -> new value, any of {title, salary, equity}

    Returns:
        Updated {id, title, salary, equity, company_handle}

    Raises:
        EmptyUpdateError: If there is nothing to update
        NotFoundError: If the job does not exist
    """
    data = {field: value for field, value in data.items() if field not in IMMUTABLE_FIELDS}

    set_clause = sql_for_partial_update(data, COLUMNS)
    id_idx = len(set_clause.values) + 1

    row = run_query(
        db,
        f"""UPDATE jobs
            SET {set_clause.set_cols}
            WHERE id = ${id_idx}
            RETURNING id, title, salary, equity, company_handle""",
        [*set_clause.values, job_id],
    ).mappings().first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    job = to_job_dict(row)
    db.commit()

    return job


def delete(db: Session, job_id: JobId) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If the job does not exist
    """
    result = run_query(db, "DELETE FROM jobs WHERE id = $1", [job_id])

    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
