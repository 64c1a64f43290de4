import logging
from typing import Dict, List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import TokenUser, ensure_admin
from jobly.core.query_params import company_filters
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailResponse,
    CompanyResponse,
    CompanyUpdateRequest,
)
from jobly.schemas.filters import CompanyFilters

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=Dict[str, CompanyResponse])
def create_company(
    request: CompanyCreateRequest,
    admin: TokenUser = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """
    Create a new company.

    Authorization required: admin
    """
    company = company_crud.create(db, request)
    logger.info(f"Created company {company['handle']} (by {admin.username})")
    return {"company": company}


@router.get("/", response_model=Dict[str, List[CompanyResponse]])
def list_companies(
    filters: CompanyFilters = Depends(company_filters),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered by:
    - nameLike: case-insensitive partial match on name
    - minEmployees: minimum number of employees
    - maxEmployees: maximum number of employees

    Authorization required: none
    """
    companies = company_crud.get_multi(db, filters.model_dump(by_alias=True, exclude_none=True))
    return {"companies": companies}


@router.get("/{handle}", response_model=Dict[str, CompanyDetailResponse])
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Retrieve a company with its jobs.

    Authorization required: none
    """
    return {"company": company_crud.get_by_handle(db, handle)}


@router.patch("/{handle}", response_model=Dict[str, CompanyResponse])
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    admin: TokenUser = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """
    Update any of a company's name, description, numEmployees and logoUrl.

    Authorization required: admin
    """
    company = company_crud.update(db, handle, request.model_dump(by_alias=True, exclude_unset=True))
    logger.info(f"Updated company {handle} (by {admin.username})")
    return {"company": company}


@router.delete("/{handle}")
def delete_company(
    handle: str,
    admin: TokenUser = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """
    Delete a company and its jobs.

    Authorization required: admin
    """
    company_crud.delete(db, handle)
    logger.info(f"Deleted company {handle} (by {admin.username})")
    return {"deleted": handle}
