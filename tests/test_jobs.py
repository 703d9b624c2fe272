"""
Route tests for /jobs.
"""

JOBS_URL = "/api/v1/jobs/"


def job_row(job_id, title, salary, equity, handle):
    return {"id": job_id, "title": title, "salary": salary, "equity": equity, "companyHandle": handle}


class TestCreateJob:
    """Test POST /jobs"""

    new_job = {"title": "New", "salary": 90000, "equity": 0.05, "companyHandle": "c3"}

    def test_create_as_admin(self, client, seeded, admin_headers):
        response = client.post(JOBS_URL, json=self.new_job, headers=admin_headers)

        assert response.status_code == 201
        job = response.json()["job"]
        assert isinstance(job["id"], int)
        assert {k: job[k] for k in self.new_job} == self.new_job

    def test_create_as_user_unauthorized(self, client, seeded, u1_headers):
        response = client.post(JOBS_URL, json=self.new_job, headers=u1_headers)

        assert response.status_code == 401

    def test_invalid_data(self, client, seeded, admin_headers):
        response = client.post(JOBS_URL, json={**self.new_job, "salary": "lots"}, headers=admin_headers)

        assert response.status_code == 400

    def test_equity_above_one(self, client, seeded, admin_headers):
        response = client.post(JOBS_URL, json={**self.new_job, "equity": 1.5}, headers=admin_headers)

        assert response.status_code == 400

    def test_unknown_company(self, client, seeded, admin_headers):
        response = client.post(JOBS_URL, json={**self.new_job, "companyHandle": "nope"}, headers=admin_headers)

        assert response.status_code == 404


class TestListJobs:
    """Test GET /jobs"""

    def test_anon_lists_all_by_title(self, client, seeded):
        job1, job2, job3 = seeded["job_ids"]
        response = client.get(JOBS_URL)

        assert response.status_code == 200
        assert response.json() == {"jobs": [
            job_row(job1, "Job1", 100000, 0.1, "c1"),
            job_row(job2, "Job2", 150000, 0.2, "c2"),
            job_row(job3, "Job3", 50000, 0.0, "c1"),
        ]}

    def test_title_filter(self, client, seeded):
        response = client.get(JOBS_URL, params={"title": "job2"})

        assert [job["title"] for job in response.json()["jobs"]] == ["Job2"]

    def test_min_salary_filter(self, client, seeded):
        response = client.get(JOBS_URL, params={"minSalary": 100000})

        assert [job["title"] for job in response.json()["jobs"]] == ["Job1", "Job2"]

    def test_has_equity_filter(self, client, seeded):
        response = client.get(JOBS_URL, params={"hasEquity": "true"})

        assert [job["title"] for job in response.json()["jobs"]] == ["Job1", "Job2"]

    def test_has_equity_false_returns_all(self, client, seeded):
        response = client.get(JOBS_URL, params={"hasEquity": "false"})

        assert len(response.json()["jobs"]) == 3

    def test_all_filters(self, client, seeded):
        response = client.get(JOBS_URL, params={"title": "job", "minSalary": 120000, "hasEquity": "true"})

        assert [job["title"] for job in response.json()["jobs"]] == ["Job2"]


class TestGetJob:
    """Test GET /jobs/{id} and /jobs/companies/{handle}"""

    def test_get(self, client, seeded):
        job1 = seeded["job_ids"][0]
        response = client.get(f"{JOBS_URL}{job1}")

        assert response.status_code == 200
        assert response.json() == {"job": job_row(job1, "Job1", 100000, 0.1, "c1")}

    def test_not_found(self, client, seeded):
        response = client.get(f"{JOBS_URL}0")

        assert response.status_code == 404

    def test_non_numeric_id(self, client, seeded):
        response = client.get(f"{JOBS_URL}abc")

        assert response.status_code == 400

    def test_jobs_for_company(self, client, seeded):
        response = client.get(f"{JOBS_URL}companies/c1")

        assert response.status_code == 200
        assert [job["title"] for job in response.json()["jobs"]] == ["Job1", "Job3"]

    def test_jobs_for_company_without_jobs(self, client, seeded):
        response = client.get(f"{JOBS_URL}companies/c3")

        assert response.status_code == 404


class TestUpdateJob:
    """Test PATCH /jobs/{id}"""

    def test_update_as_admin(self, client, seeded, admin_headers):
        job1 = seeded["job_ids"][0]
        response = client.patch(f"{JOBS_URL}{job1}", json={"title": "Job1-new", "salary": 110000}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"job": job_row(job1, "Job1-new", 110000, 0.1, "c1")}

    def test_update_as_user_unauthorized(self, client, seeded, u1_headers):
        job1 = seeded["job_ids"][0]
        response = client.patch(f"{JOBS_URL}{job1}", json={"title": "Job1-new"}, headers=u1_headers)

        assert response.status_code == 401

    def test_cannot_change_company(self, client, seeded, admin_headers):
        job1 = seeded["job_ids"][0]
        response = client.patch(f"{JOBS_URL}{job1}", json={"companyHandle": "c2"}, headers=admin_headers)

        assert response.status_code == 400

    def test_cannot_change_id(self, client, seeded, admin_headers):
        job1 = seeded["job_ids"][0]
        response = client.patch(f"{JOBS_URL}{job1}", json={"id": 99}, headers=admin_headers)

        assert response.status_code == 400

    def test_not_found(self, client, seeded, admin_headers):
        response = client.patch(f"{JOBS_URL}0", json={"title": "nope"}, headers=admin_headers)

        assert response.status_code == 404

    def test_empty_patch(self, client, seeded, admin_headers):
        job1 = seeded["job_ids"][0]
        response = client.patch(f"{JOBS_URL}{job1}", json={}, headers=admin_headers)

        assert response.status_code == 400

    def test_null_title(self, client, seeded, admin_headers):
        job1 = seeded["job_ids"][0]
        response = client.patch(f"{JOBS_URL}{job1}", json={"title": None}, headers=admin_headers)

        assert response.status_code == 400


class TestDeleteJob:
    """Test DELETE /jobs/{id}"""

    def test_delete_as_admin(self, client, seeded, admin_headers):
        job1 = seeded["job_ids"][0]
        response = client.delete(f"{JOBS_URL}{job1}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": job1}

    def test_delete_as_user_unauthorized(self, client, seeded, u1_headers):
        job1 = seeded["job_ids"][0]
        response = client.delete(f"{JOBS_URL}{job1}", headers=u1_headers)

        assert response.status_code == 401

    def test_not_found(self, client, seeded, admin_headers):
        response = client.delete(f"{JOBS_URL}0", headers=admin_headers)

        assert response.status_code == 404
