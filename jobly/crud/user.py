"""
CRUD operations for users, their job applications and job matching.
"""

from typing import Any, Dict, List, Mapping, Union

from sqlalchemy.orm import Session

from jobly.core.database import run_query
from jobly.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import sql_for_partial_update
from jobly.crud.job import to_job_dict
from jobly.models.application import ApplicationStatus

# Request field -> column
COLUMNS: Dict[str, str] = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


def _to_user_dict(row: Mapping[str, Any]) -> Dict[str, Any]:
    user = dict(row)
    # SQLite hands booleans back as integers
    user["is_admin"] = bool(user["is_admin"])
    return user


def _ensure_exists(db: Session, username: str) -> None:
    row = run_query(db, "SELECT username FROM users WHERE username = $1", [username]).first()
    if not row:
        raise NotFoundError(f"No user: {username}")


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Returns:
        {username, first_name, last_name, email, is_admin}

    Raises:
        UnauthorizedError: If the user does not exist or the password is wrong
    """
    row = run_query(
        db,
        """SELECT username, password, first_name, last_name, email, is_admin
           FROM users
           WHERE username = $1""",
        [username],
    ).mappings().first()

    if row and verify_password(password, row["password"]):
        user = _to_user_dict(row)
        del user["password"]
        return user

    raise UnauthorizedError("Invalid username/password")


def register(
    db: Session,
    username: str,
    password: str,
    first_name: str,
    last_name: str,
    email: str,
    is_admin: bool = False,
) -> Dict[str, Any]:
    """
    Create a user with a bcrypt-hashed password.

    Returns:
        {username, first_name, last_name, email, is_admin}

    Raises:
        BadRequestError: If the username is taken
    """
    duplicate = run_query(db, "SELECT username FROM users WHERE username = $1", [username]).first()
    if duplicate:
        raise BadRequestError(f"Duplicate username: {username}")

    row = run_query(
        db,
        """INSERT INTO users (username, password, first_name, last_name, email, is_admin)
           VALUES ($1, $2, $3, $4, $5, $6)
           RETURNING username, first_name, last_name, email, is_admin""",
        [username, get_password_hash(password), first_name, last_name, email, is_admin],
    ).mappings().one()
    user = _to_user_dict(row)
    db.commit()

    return user


def get_multi(db: Session) -> List[Dict[str, Any]]:
    """List all users ordered by username."""
    rows = run_query(
        db,
        """SELECT username, first_name, last_name, email, is_admin
           FROM users
           ORDER BY username""",
    ).mappings().all()

    return [_to_user_dict(row) for row in rows]


def get_by_username(db: Session, username: str) -> Dict[str, Any]:
    """
    Retrieve a user and the ids of the jobs they applied to.

    Returns:
        {username, first_name, last_name, email, is_admin, jobs}

    Raises:
        NotFoundError: If the user does not exist
    """
    row = run_query(
        db,
        """SELECT username, first_name, last_name, email, is_admin
           FROM users
           WHERE username = $1""",
        [username],
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No user: {username}")

    job_ids = run_query(
        db,
        """SELECT job_id
           FROM applications
           WHERE username = $1
           ORDER BY job_id""",
        [username],
    ).scalars().all()

    user = _to_user_dict(row)
    user["jobs"] = list(job_ids)
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user.

    Data can include {firstName, lastName, password, email, isAdmin}. A new
    password is hashed before it is stored.

    WARNING: this can set a new password or make a user an admin. Callers
    must validate the data first.

    Raises:
        EmptyUpdateError: If there is nothing to update
        NotFoundError: If the user does not exist
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = get_password_hash(data["password"])

    set_clause = sql_for_partial_update(data, COLUMNS)
    username_idx = len(set_clause.values) + 1

    row = run_query(
        db,
        f"""UPDATE users
            SET {set_clause.set_cols}
            WHERE username = ${username_idx}
            RETURNING username, first_name, last_name, email, is_admin""",
        [*set_clause.values, username],
    ).mappings().first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    user = _to_user_dict(row)
    db.commit()

    return user


def delete(db: Session, username: str) -> None:
    """
    Delete a user.

    Raises:
        NotFoundError: If the user does not exist
    """
    row = run_query(
        db,
        "DELETE FROM users WHERE username = $1 RETURNING username",
        [username],
    ).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    db.commit()


def apply_to_job(db: Session, username: str, job_id: Union[int, float]) -> Dict[str, Any]:
    """
    Record that a user applied to a job.

    Returns:
        {username, job_id, status}

    Raises:
        NotFoundError: If the user or the job does not exist
        BadRequestError: If the user already applied to the job
    """
    _ensure_exists(db, username)

    job = run_query(db, "SELECT id FROM jobs WHERE id = $1", [job_id]).first()
    if not job:
        raise NotFoundError(f"No job: {job_id}")

    existing = run_query(
        db,
        "SELECT status FROM applications WHERE username = $1 AND job_id = $2",
        [username, job_id],
    ).first()
    if existing:
        raise BadRequestError(f"{username} already applied to job {job_id}")

    row = run_query(
        db,
        """INSERT INTO applications (username, job_id, status)
           VALUES ($1, $2, $3)
           RETURNING username, job_id, status""",
        [username, job_id, ApplicationStatus.APPLIED.value],
    ).mappings().one()
    application = dict(row)
    db.commit()

    return application


def match_jobs(db: Session, username: str) -> List[Dict[str, Any]]:
    """
    Find jobs that use at least one of the user's technologies.

    Returns:
        [{id, title, salary, equity, company_handle, technologies}, ...]
        ordered by job id, where technologies are the shared technology names

    Raises:
        NotFoundError: If the user does not exist
    """
    _ensure_exists(db, username)

    rows = run_query(
        db,
        """SELECT j.id,
                  j.title,
                  j.salary,
                  j.equity,
                  j.company_handle,
                  t.name AS technology
           FROM users_technologies AS ut
           JOIN jobs_technologies AS jt ON ut.tech_id = jt.tech_id
           JOIN jobs AS j ON jt.job_id = j.id
           JOIN technologies AS t ON ut.tech_id = t.id
           WHERE ut.username = $1
           ORDER BY j.id, t.name""",
        [username],
    ).mappings().all()

    jobs: Dict[int, Dict[str, Any]] = {}
    for row in rows:
        job = jobs.get(row["id"])
        if job is None:
            job = to_job_dict({key: value for key, value in row.items() if key != "technology"})
            job["technologies"] = []
            jobs[row["id"]] = job
        job["technologies"].append(row["technology"])

    return list(jobs.values())
