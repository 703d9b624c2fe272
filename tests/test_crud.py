"""
Unit tests for the CRUD layer against the storage adapter.

Tests:
- Statements issued for partial updates
- Existence and uniqueness errors
- Range validation before listing
"""

import pytest

from app.core.database import Database, QueryResult
from app.core.errors import DuplicateError, NotFoundError, ValidationError, UnauthorizedError
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.crud import user as user_crud
from app.schemas.company import CompanyFilters
from app.schemas.job import JobFilters


class RecordingDatabase(Database):
    """Storage adapter that remembers every statement it runs"""

    def __init__(self, session):
        super().__init__(session)
        self.statements = []

    def query(self, sql, values=()):
        self.statements.append((" ".join(sql.split()), list(values)))
        return super().query(sql, values)


@pytest.fixture
def recording(db_session, seeded):
    return RecordingDatabase(db_session)


class TestDatabase:
    """Test the storage adapter"""

    def test_positional_placeholders(self, storage, seeded):
        result = storage.query("SELECT handle FROM companies WHERE num_employees >= $1 AND handle <> $2 ORDER BY handle", [2, "c3"])

        assert isinstance(result, QueryResult)
        assert result.rows == [{"handle": "c2"}]

    def test_statement_without_rows(self, storage, seeded):
        result = storage.query("DELETE FROM applications WHERE username = $1", ["u1"])

        assert result.rows == []


class TestCompanyCrud:
    """Test company CRUD functions"""

    def test_update_issues_single_statement(self, recording):
        company = company_crud.update(recording, "c1", {"numEmployees": 5})

        sql, values = recording.statements[-1]
        assert 'SET "num_employees"=$1 WHERE handle = $2' in sql
        assert values == [5, "c1"]
        assert company["numEmployees"] == 5

    def test_update_missing(self, recording):
        with pytest.raises(NotFoundError):
            company_crud.update(recording, "nope", {"numEmployees": 5})

    def test_update_empty_patch(self, recording):
        with pytest.raises(ValidationError):
            company_crud.update(recording, "c1", {})
        assert recording.statements == []

    def test_create_duplicate(self, storage, seeded):
        with pytest.raises(DuplicateError):
            company_crud.create(storage, {"handle": "c1", "name": "Other"})

    def test_create_duplicate_name(self, storage, seeded):
        with pytest.raises(DuplicateError):
            company_crud.create(storage, {"handle": "other", "name": "C1"})

    def test_update_name_taken(self, storage, seeded):
        with pytest.raises(DuplicateError):
            company_crud.update(storage, "c1", {"name": "C3"})
        assert company_crud.get(storage, "c1")["name"] == "C1"

    def test_find_all_range_check(self, storage, seeded):
        with pytest.raises(ValidationError):
            company_crud.find_all(storage, CompanyFilters(min_employees=3, max_employees=1))

    def test_find_all_filters(self, recording):
        companies = company_crud.find_all(recording, CompanyFilters(name="C", min_employees=1, max_employees=3))

        sql, values = recording.statements[-1]
        assert values == ["%C%", 1, 3]
        assert [c["handle"] for c in companies] == ["c1", "c2", "c3"]

    def test_remove(self, storage, seeded):
        company_crud.remove(storage, "c3")

        with pytest.raises(NotFoundError):
            company_crud.get(storage, "c3")
        with pytest.raises(NotFoundError):
            company_crud.remove(storage, "c3")


class TestJobCrud:
    """Test job CRUD functions"""

    def test_has_equity_binds_no_value(self, recording):
        jobs = job_crud.find_all(recording, JobFilters(has_equity=True))

        sql, values = recording.statements[-1]
        assert "equity > 0" in sql
        assert values == []
        assert [job["title"] for job in jobs] == ["Job1", "Job2"]

    def test_update(self, recording, seeded):
        job1 = seeded["job_ids"][0]
        job = job_crud.update(recording, job1, {"salary": 1, "equity": 0.5})

        sql, values = recording.statements[-1]
        assert 'SET "salary"=$1, "equity"=$2 WHERE id = $3' in sql
        assert values == [1, 0.5, job1]
        assert job["salary"] == 1

    def test_get_missing(self, storage, seeded):
        with pytest.raises(NotFoundError):
            job_crud.get(storage, 0)

    def test_remove_missing(self, storage, seeded):
        with pytest.raises(NotFoundError):
            job_crud.remove(storage, 0)


class TestUserCrud:
    """Test user CRUD functions"""

    def test_authenticate(self, storage, seeded):
        user = user_crud.authenticate(storage, "u1", "password-u1")

        assert user["username"] == "u1"
        assert "password" not in user

    def test_authenticate_wrong_password(self, storage, seeded):
        with pytest.raises(UnauthorizedError):
            user_crud.authenticate(storage, "u1", "wrong")

    def test_update_hashes_password(self, recording):
        user_crud.update(recording, "u1", {"password": "new-password"})

        sql, values = recording.statements[-1]
        assert values[0] != "new-password"
        assert values[0].startswith("$2")
        assert user_crud.authenticate(recording, "u1", "new-password")["username"] == "u1"

    def test_update_maps_columns(self, recording):
        user_crud.update(recording, "u1", {"firstName": "F", "email": "f@example.com"})

        sql, values = recording.statements[-1]
        assert 'SET "first_name"=$1, "email"=$2 WHERE username = $3' in sql
        assert values == ["F", "f@example.com", "u1"]

    def test_update_email_taken(self, recording):
        with pytest.raises(DuplicateError):
            user_crud.update(recording, "u1", {"email": "u2@example.com"})
        assert not any(sql.startswith("UPDATE") for sql, _ in recording.statements)

    def test_apply_duplicate(self, storage, seeded):
        job1 = seeded["job_ids"][0]
        application = user_crud.apply_to_job(storage, "u1", job1)

        assert application == {"username": "u1", "jobId": job1}
        with pytest.raises(DuplicateError):
            user_crud.apply_to_job(storage, "u1", job1)

    def test_get_missing(self, storage, seeded):
        with pytest.raises(NotFoundError):
            user_crud.get(storage, "nope")
