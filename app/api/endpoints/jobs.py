import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.core.database import Database, get_storage
from app.core.deps import require_admin
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobUpdateRequest,
    JobFilters,
    JobEnvelope,
    JobListEnvelope,
    JobDeletedResponse,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def create_job(request: JobCreateRequest, db: Database = Depends(get_storage)):
    """
    Create a job posting for an existing company.

    Admin only. Returns 404 if companyHandle does not name a company.
    """
    job = job_crud.create(db, request.model_dump(by_alias=True))
    return {"job": job}


@router.get("/", response_model=JobListEnvelope)
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: bool = Query(False, alias="hasEquity"),
    db: Database = Depends(get_storage),
):
    """
    List jobs ordered by title.

    Args:
        title: Case-insensitive substring of the job title
        minSalary: Only jobs paying at least this much
        hasEquity: If true, only jobs offering non-zero equity
    """
    filters = JobFilters(title=title, min_salary=min_salary, has_equity=has_equity)
    return {"jobs": job_crud.find_all(db, filters)}


# Registered before /{job_id} so "companies" is not parsed as an id
@router.get("/companies/{handle}", response_model=JobListEnvelope)
def list_company_jobs(handle: str, db: Database = Depends(get_storage)):
    """List the jobs posted by one company; 404 if it has none."""
    return {"jobs": job_crud.get_by_company(db, handle)}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Database = Depends(get_storage)):
    """Retrieve a job by ID."""
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def update_job(job_id: int, request: JobUpdateRequest, db: Database = Depends(get_storage)):
    """Patch any of title, salary, equity. id and companyHandle are rejected."""
    patch = request.model_dump(by_alias=True, exclude_unset=True)
    return {"job": job_crud.update(db, job_id, patch)}


@router.delete("/{job_id}", response_model=JobDeletedResponse, dependencies=[Depends(require_admin)])
def delete_job(job_id: int, db: Database = Depends(get_storage)):
    """
    Delete a job by ID.
    """
    job_crud.remove(db, job_id)
    return {"deleted": job_id}
