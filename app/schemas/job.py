from pydantic import BaseModel, Field, field_validator
from typing import List, Optional


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle")

    class Config:
        populate_by_name = True
        extra = "forbid"


class JobUpdateRequest(BaseModel):
    """
    Schema for patching a job.

    `id` and `companyHandle` are not accepted; a job never moves between companies.
    """
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)

    @field_validator("title", mode="before")
    @classmethod
    def reject_null_title(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v

    class Config:
        extra = "forbid"


class JobFilters(BaseModel):
    """Optional search filters for listing jobs"""
    title: Optional[str] = None
    min_salary: Optional[int] = Field(None, ge=0, alias="minSalary")
    has_equity: bool = Field(False, alias="hasEquity")

    class Config:
        populate_by_name = True


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str = Field(..., alias="companyHandle")

    class Config:
        populate_by_name = True


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]


class JobDeletedResponse(BaseModel):
    deleted: int
