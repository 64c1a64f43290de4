import logging
from typing import Dict, List, Union
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import TokenUser, ensure_admin
from jobly.core.query_params import job_filters, job_id_param
from jobly.crud import job as job_crud
from jobly.schemas.filters import JobFilters
from jobly.schemas.job import JobCreateRequest, JobResponse, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=Dict[str, JobResponse])
def create_job(
    request: JobCreateRequest,
    admin: TokenUser = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """
    Create a new job posting.

    Authorization required: admin
    """
    job = job_crud.create(db, request)
    logger.info(f"Created job {job['id']}: {job['title']} at {job['company_handle']} (by {admin.username})")
    return {"job": job}


@router.get("/", response_model=Dict[str, List[JobResponse]])
def list_jobs(
    filters: JobFilters = Depends(job_filters),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered by:
    - title: case-insensitive partial match
    - minSalary: minimum salary
    - hasEquity: true to only list jobs with non-zero equity

    Authorization required: none
    """
    jobs = job_crud.get_multi(db, filters.model_dump(by_alias=True, exclude_none=True))
    return {"jobs": jobs}


@router.get("/{id}", response_model=Dict[str, JobResponse])
def get_job(
    job_id: Union[int, float] = Depends(job_id_param),
    db: Session = Depends(get_db)
):
    """
    Retrieve a job by ID.

    Authorization required: none
    """
    return {"job": job_crud.get_by_id(db, job_id)}


@router.patch("/{id}", response_model=Dict[str, JobResponse])
def update_job(
    request: JobUpdateRequest,
    job_id: Union[int, float] = Depends(job_id_param),
    admin: TokenUser = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """
    Update any of a job's title, salary and equity.

    Authorization required: admin
    """
    job = job_crud.update(db, job_id, request.model_dump(by_alias=True, exclude_unset=True))
    logger.info(f"Updated job {job_id} (by {admin.username})")
    return {"job": job}


@router.delete("/{id}")
def delete_job(
    job_id: Union[int, float] = Depends(job_id_param),
    admin: TokenUser = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """
    Delete a job by ID.

    Authorization required: admin
    """
    job_crud.delete(db, job_id)
    logger.info(f"Deleted job {job_id} (by {admin.username})")
    return {"deleted": job_id}
