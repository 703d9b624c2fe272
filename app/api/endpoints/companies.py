"""
Company endpoints.

Listing and detail are public; creating, patching and deleting need an admin.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.core.database import Database, get_storage
from app.core.deps import require_admin
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyFilters,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListEnvelope,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=CompanyEnvelope, dependencies=[Depends(require_admin)])
def create_company(request: CompanyCreateRequest, db: Database = Depends(get_storage)):
    """Create a company. Fails with 400 if the handle is taken."""
    company = company_crud.create(db, request.model_dump(by_alias=True))
    return {"company": company}


@router.get("/", response_model=CompanyListEnvelope)
def list_companies(
    name: Optional[str] = None,
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Database = Depends(get_storage),
):
    """
    List companies ordered by name.

    Args:
        name: Case-insensitive substring of the company name
        minEmployees: Lower bound on employee count
        maxEmployees: Upper bound on employee count (must be >= minEmployees)
    """
    filters = CompanyFilters(name=name, min_employees=min_employees, max_employees=max_employees)
    return {"companies": company_crud.find_all(db, filters)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Database = Depends(get_storage)):
    """Retrieve a company and its jobs."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(require_admin)])
def update_company(handle: str, request: CompanyUpdateRequest, db: Database = Depends(get_storage)):
    """Patch any of name, description, numEmployees, logoUrl."""
    patch = request.model_dump(by_alias=True, exclude_unset=True)
    return {"company": company_crud.update(db, handle, patch)}


@router.delete("/{handle}", dependencies=[Depends(require_admin)])
def delete_company(handle: str, db: Database = Depends(get_storage)):
    """Delete a company by handle."""
    company_crud.remove(db, handle)
    return {"deleted": handle}
