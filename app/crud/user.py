"""
CRUD operations for users and their job applications.

Passwords are stored as bcrypt hashes and never returned.
"""

import logging
from typing import Any, Dict, List, Mapping

from app.core.database import Database
from app.core.errors import DuplicateError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.core.sql import sql_for_partial_update

logger = logging.getLogger(__name__)

COLUMN_MAP: Mapping[str, str] = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

USER_COLUMNS = (
    'username, first_name AS "firstName", last_name AS "lastName", email, is_admin AS "isAdmin"'
)


def authenticate(db: Database, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Returns:
        The user row (without password)

    Raises:
        UnauthorizedError: If the user is missing or the password is wrong
    """
    result = db.query(f"SELECT {USER_COLUMNS}, password FROM users WHERE username = $1", [username])

    if result.rows:
        user = result.rows[0]
        hashed = user.pop("password")
        if verify_password(password, hashed):
            return user

    logger.info(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")


def register(db: Database, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a user.

    Args:
        data: {username, password, firstName, lastName, email, isAdmin}

    Raises:
        DuplicateError: If the username or email is already taken
    """
    username = data["username"]
    email = data["email"]

    if db.query("SELECT username FROM users WHERE username = $1", [username]).rows:
        raise DuplicateError(f"Duplicate username: {username}")
    if db.query("SELECT username FROM users WHERE email = $1", [email]).rows:
        raise DuplicateError(f"Duplicate email: {email}")

    result = db.query(
        f"""INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}""",
        [
            username,
            get_password_hash(data["password"]),
            data["firstName"],
            data["lastName"],
            email,
            bool(data.get("isAdmin", False)),
        ],
    )

    user = result.rows[0]
    logger.info(f"Registered user {username} (admin: {user['isAdmin']})")
    return user


def find_all(db: Database) -> List[Dict[str, Any]]:
    """List every user ordered by username."""
    return db.query(f"SELECT {USER_COLUMNS} FROM users ORDER BY username").rows


def get(db: Database, username: str) -> Dict[str, Any]:
    """
    Fetch one user with the ids of the jobs they applied to.

    Raises:
        NotFoundError: If no such user
    """
    result = db.query(f"SELECT {USER_COLUMNS} FROM users WHERE username = $1", [username])
    if not result.rows:
        raise NotFoundError(f"No user: {username}")

    user = result.rows[0]
    applications = db.query(
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        [username],
    )
    user["jobs"] = [row["job_id"] for row in applications.rows]
    return user


def update(db: Database, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a user. A new password is hashed before it is stored.

    Raises:
        ValidationError: If data is empty
        DuplicateError: If another user already has the new email
        NotFoundError: If no such user
    """
    patch = dict(data)
    if patch.get("email") is not None:
        taken = db.query(
            "SELECT username FROM users WHERE email = $1 AND username <> $2",
            [patch["email"], username],
        )
        if taken.rows:
            raise DuplicateError(f"Duplicate email: {patch['email']}")
    if "password" in patch:
        patch["password"] = get_password_hash(patch["password"])

    fragment = sql_for_partial_update(patch, COLUMN_MAP)
    username_idx = f"${len(fragment.values) + 1}"

    result = db.query(
        f"""UPDATE users
            SET {fragment.clause}
            WHERE username = {username_idx}
            RETURNING {USER_COLUMNS}""",
        [*fragment.values, username],
    )
    if not result.rows:
        raise NotFoundError(f"No user: {username}")

    logger.info(f"Updated user {username}: {sorted(data)}")
    return result.rows[0]


def remove(db: Database, username: str) -> None:
    """
    Raises:
        NotFoundError: If no such user
    """
    result = db.query("DELETE FROM users WHERE username = $1 RETURNING username", [username])
    if not result.rows:
        raise NotFoundError(f"No user: {username}")

    logger.info(f"Deleted user {username}")


def apply_to_job(db: Database, username: str, job_id: int) -> Dict[str, Any]:
    """
    Record an application. The caller has already checked that both the
    user and the job exist.

    Returns:
        {"username": ..., "jobId": ...}

    Raises:
        DuplicateError: If the user already applied to this job
    """
    existing = db.query(
        "SELECT job_id FROM applications WHERE username = $1 AND job_id = $2",
        [username, job_id],
    )
    if existing.rows:
        raise DuplicateError(f"Duplicate application: {username} already applied to job {job_id}")

    result = db.query(
        'INSERT INTO applications (username, job_id) VALUES ($1, $2) RETURNING username, job_id AS "jobId"',
        [username, job_id],
    )

    logger.info(f"User {username} applied to job {job_id}")
    return result.rows[0]
