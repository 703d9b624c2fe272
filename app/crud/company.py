"""
CRUD operations for companies.

Companies are keyed by their handle. Every function runs its statements
through the storage adapter and returns plain dicts with camelCase keys.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from app.core.database import Database
from app.core.errors import DuplicateError, NotFoundError, ValidationError
from app.core.sql import WhereBuilder, FilteredQuery, sql_for_partial_update
from app.schemas.company import CompanyFilters

logger = logging.getLogger(__name__)

# Patchable fields whose column name differs from the field name
COLUMN_MAP: Mapping[str, str] = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'


def _check_name_free(db: Database, name: str, exclude_handle: Optional[str] = None) -> None:
    """Company names are unique; raise DuplicateError if another company uses this one."""
    result = db.query("SELECT handle FROM companies WHERE name = $1", [name])
    if any(row["handle"] != exclude_handle for row in result.rows):
        raise DuplicateError(f"Duplicate company name: {name}")


def create(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Storage adapter
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        The new company row

    Raises:
        DuplicateError: If the handle or name is already taken
    """
    handle = data["handle"]
    duplicate_check = db.query("SELECT handle FROM companies WHERE handle = $1", [handle])
    if duplicate_check.rows:
        raise DuplicateError(f"Duplicate company: {handle}")
    _check_name_free(db, data["name"])

    result = db.query(
        f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}""",
        [
            handle,
            data["name"],
            data.get("description") or "",
            data.get("numEmployees"),
            data.get("logoUrl"),
        ],
    )

    company = result.rows[0]
    logger.info(f"Created company {handle}")
    return company


def build_filtered_query(filters: CompanyFilters) -> FilteredQuery:
    """Build the listing query: name substring and employee-count range."""
    where = WhereBuilder()

    if filters.name:
        where.add("name ILIKE {}", f"%{filters.name}%")
    if filters.min_employees is not None:
        where.add("num_employees >= {}", filters.min_employees)
    if filters.max_employees is not None:
        where.add("num_employees <= {}", filters.max_employees)

    return where.build(f"SELECT {COMPANY_COLUMNS} FROM companies", order_by="name")


def find_all(db: Database, filters: Optional[CompanyFilters] = None) -> List[Dict[str, Any]]:
    """
    List companies ordered by name.

    Raises:
        ValidationError: If minEmployees is greater than maxEmployees
    """
    filters = filters or CompanyFilters()
    if (
        filters.min_employees is not None
        and filters.max_employees is not None
        and filters.min_employees > filters.max_employees
    ):
        raise ValidationError("minEmployees cannot be greater than maxEmployees")

    query = build_filtered_query(filters)
    return db.query(query.sql, query.values).rows


def get(db: Database, handle: str) -> Dict[str, Any]:
    """
    Fetch one company with its jobs.

    Raises:
        NotFoundError: If no company has this handle
    """
    result = db.query(f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1", [handle])
    if not result.rows:
        raise NotFoundError(f"No company: {handle}")

    company = result.rows[0]
    jobs = db.query(
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    )
    company["jobs"] = jobs.rows
    return company


def update(db: Database, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company.

    Args:
        data: Any of {name, description, numEmployees, logoUrl}

    Raises:
        ValidationError: If data is empty
        DuplicateError: If another company already has the new name
        NotFoundError: If no company has this handle
    """
    if data.get("name") is not None:
        _check_name_free(db, data["name"], exclude_handle=handle)

    fragment = sql_for_partial_update(data, COLUMN_MAP)
    handle_idx = f"${len(fragment.values) + 1}"

    result = db.query(
        f"""UPDATE companies
            SET {fragment.clause}
            WHERE handle = {handle_idx}
            RETURNING {COMPANY_COLUMNS}""",
        [*fragment.values, handle],
    )
    if not result.rows:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Updated company {handle}: {sorted(data)}")
    return result.rows[0]


def remove(db: Database, handle: str) -> None:
    """
    Delete a company.

    Raises:
        NotFoundError: If no company has this handle
    """
    result = db.query("DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
    if not result.rows:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
