"""
CRUD operations for jobs.

Jobs are keyed by their numeric id and always belong to a company.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from app.core.database import Database
from app.core.errors import NotFoundError
from app.core.sql import WhereBuilder, FilteredQuery, sql_for_partial_update
from app.schemas.job import JobFilters

logger = logging.getLogger(__name__)

COLUMN_MAP: Mapping[str, str] = {
    "companyHandle": "company_handle",
}

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'


def create(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job for an existing company.

    Args:
        db: Storage adapter
        data: {title, salary, equity, companyHandle}

    Raises:
        NotFoundError: If the company does not exist
    """
    handle = data["companyHandle"]
    if not db.query("SELECT handle FROM companies WHERE handle = $1", [handle]).rows:
        raise NotFoundError(f"No company: {handle}")

    result = db.query(
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}""",
        [data["title"], data.get("salary"), data.get("equity"), handle],
    )

    job = result.rows[0]
    logger.info(f"Created job {job['id']}: {job['title']} at {handle}")
    return job


def build_filtered_query(filters: JobFilters) -> FilteredQuery:
    """Build the listing query: title substring, salary floor, equity flag."""
    where = WhereBuilder()

    if filters.title:
        where.add("title ILIKE {}", f"%{filters.title}%")
    if filters.min_salary is not None:
        where.add("salary >= {}", filters.min_salary)
    if filters.has_equity:
        where.add_raw("equity > 0")

    return where.build(f"SELECT {JOB_COLUMNS} FROM jobs", order_by="title")


def find_all(db: Database, filters: Optional[JobFilters] = None) -> List[Dict[str, Any]]:
    """List jobs ordered by title; an empty list when nothing matches."""
    query = build_filtered_query(filters or JobFilters())
    return db.query(query.sql, query.values).rows


def get(db: Database, job_id: int) -> Dict[str, Any]:
    """
    Raises:
        NotFoundError: If no job has this id
    """
    result = db.query(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", [job_id])
    if not result.rows:
        raise NotFoundError(f"No job: {job_id}")
    return result.rows[0]


def get_by_company(db: Database, handle: str) -> List[Dict[str, Any]]:
    """
    List the jobs posted by one company.

    Raises:
        NotFoundError: If the company has no jobs (or does not exist)
    """
    result = db.query(
        f"SELECT {JOB_COLUMNS} FROM jobs WHERE company_handle = $1 ORDER BY title",
        [handle],
    )
    if not result.rows:
        raise NotFoundError(f"No jobs found for: {handle}")
    return result.rows


def update(db: Database, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job.

    Raises:
        ValidationError: If data is empty
        NotFoundError: If no job has this id
    """
    fragment = sql_for_partial_update(data, COLUMN_MAP)
    id_idx = f"${len(fragment.values) + 1}"

    result = db.query(
        f"""UPDATE jobs
            SET {fragment.clause}
            WHERE id = {id_idx}
            RETURNING {JOB_COLUMNS}""",
        [*fragment.values, job_id],
    )
    if not result.rows:
        raise NotFoundError(f"No job: {job_id}")

    logger.info(f"Updated job {job_id}: {sorted(data)}")
    return result.rows[0]


def remove(db: Database, job_id: int) -> None:
    """
    Raises:
        NotFoundError: If no job has this id
    """
    result = db.query("DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not result.rows:
        raise NotFoundError(f"No job: {job_id}")

    logger.info(f"Deleted job {job_id}")
