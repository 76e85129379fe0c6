"""
API tests for the job endpoints.

Run with: pytest tests/test_jobs_api.py -v
"""

from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient

from jobpool.api.app import app
from jobpool.config import settings
from jobpool.db import Application, Company, Job
from jobpool.services import JobService


def auth(user):
    return {"X-User-ID": user.id}


class TestListJobs:
    def _setup(self, seed):
        country = seed.country("Canada")
        other_country = seed.country("Mexico")
        toronto = seed.city(country, "Toronto")
        ottawa = seed.city(country, "Ottawa")
        electrician = seed.profession("Electrician")
        plumber = seed.profession("Plumber")
        acme = seed.company(name="Acme")
        globex = seed.company(name="Globex")

        now = datetime.now(UTC)
        jobs = {
            "a": seed.job(acme, electrician, now - timedelta(days=3), city_id=toronto.id, country_id=country.id),
            "b": seed.job(
                acme, plumber, now - timedelta(days=1), city_id=ottawa.id, country_id=country.id, job_type="part-time"
            ),
            "c": seed.job(globex, electrician, now - timedelta(days=2), city_id=ottawa.id, country_id=country.id),
            "d": seed.job(globex, plumber, now, country_id=other_country.id, status="closed"),
        }
        refs = {
            "toronto": toronto,
            "ottawa": ottawa,
            "canada": country,
            "electrician": electrician,
            "plumber": plumber,
            "acme": acme,
            "globex": globex,
        }
        return jobs, refs

    def test_no_filters_returns_all_newest_first(self, client, seed):
        jobs, _ = self._setup(seed)

        resp = client.get("/api/jobs")

        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["count"] == 4
        assert [j["id"] for j in body["data"]] == [jobs[k].id for k in ("d", "b", "c", "a")]

    def test_single_filter(self, client, seed):
        jobs, refs = self._setup(seed)

        resp = client.get("/api/jobs", params={"profession": refs["electrician"].id})

        ids = {j["id"] for j in resp.json()["data"]}
        assert ids == {jobs["a"].id, jobs["c"].id}

    def test_filters_are_conjunctive(self, client, seed):
        jobs, refs = self._setup(seed)

        resp = client.get("/api/jobs", params={"profession": refs["electrician"].id, "city": refs["ottawa"].id})

        assert [j["id"] for j in resp.json()["data"]] == [jobs["c"].id]

    def test_job_type_status_and_company_filters(self, client, seed):
        jobs, refs = self._setup(seed)

        by_type = client.get("/api/jobs", params={"jobType": "part-time"}).json()
        by_status = client.get("/api/jobs", params={"status": "closed"}).json()
        by_company = client.get("/api/jobs", params={"company": refs["acme"].id, "country": refs["canada"].id}).json()

        assert [j["id"] for j in by_type["data"]] == [jobs["b"].id]
        assert [j["id"] for j in by_status["data"]] == [jobs["d"].id]
        assert [j["id"] for j in by_company["data"]] == [jobs["b"].id, jobs["a"].id]

    def test_filter_without_matches(self, client, seed):
        self._setup(seed)

        body = client.get("/api/jobs", params={"city": "no-such-city"}).json()

        assert body == {"success": True, "data": [], "count": 0}

    def test_references_are_populated(self, client, seed):
        jobs, refs = self._setup(seed)

        body = client.get("/api/jobs", params={"city": refs["toronto"].id}).json()
        job = body["data"][0]

        assert job["company"] == {
            "id": refs["acme"].id,
            "companyName": "Acme",
            "logo": "uploads/company-logos/acme.png",
        }
        assert job["profession"] == {"id": refs["electrician"].id, "name": "Electrician", "category": "Construction"}
        assert job["city"] == {"id": refs["toronto"].id, "name": "Toronto"}
        assert job["country"]["name"] == "Canada"
        assert job["professionName"] == "Electrician"


class TestGetJob:
    def test_not_found(self, client):
        resp = client.get("/api/jobs/does-not-exist")

        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Job not found"}

    def test_detail_is_populated(self, client, seed):
        country = seed.country()
        province = seed.province(country)
        city = seed.city(country, province=province)
        company = seed.company()
        job = seed.job(
            company,
            seed.profession(),
            city_id=city.id,
            country_id=country.id,
            province_id=province.id,
            title="Site Electrician",
        )

        data = client.get(f"/api/jobs/{job.id}").json()["data"]

        assert data["title"] == "Site Electrician"
        assert data["company"]["description"] == "Builders"
        assert data["province"] == {"id": province.id, "name": "Ontario"}
        assert data["applications"] == []

    def test_each_fetch_counts_one_view(self, client, seed, db):
        job = seed.job(seed.company(), seed.profession())

        views = [client.get(f"/api/jobs/{job.id}").json()["data"]["views"] for _ in range(3)]

        assert views == [1, 2, 3]
        db.expire_all()
        assert db.get(Job, job.id).views == 3


class TestCreateJob:
    def test_electrician_scenario(self, client, seed, db):
        owner = seed.user(role="company")
        company = seed.company(owner)
        profession = seed.profession("Electrician")
        assert company.total_jobs_posted == 0

        resp = client.post(
            "/api/jobs",
            json={"profession": profession.id, "title": "Electrician needed", "jobType": "contract"},
            headers=auth(owner),
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["success"] is True
        assert body["data"]["professionName"] == "Electrician"
        assert body["data"]["jobType"] == "contract"
        assert body["data"]["company"]["id"] == company.id
        db.expire_all()
        assert db.get(Company, company.id).total_jobs_posted == 1

    def test_missing_profession_reported_before_missing_company(self, client, seed):
        user = seed.user(role="company")

        resp = client.post("/api/jobs", json={"profession": "nope"}, headers=auth(user))

        assert resp.status_code == 404
        assert resp.json()["message"] == "Profession not found"

    def test_caller_without_company(self, client, seed):
        user = seed.user(role="company")
        profession = seed.profession()

        resp = client.post("/api/jobs", json={"profession": profession.id}, headers=auth(user))

        assert resp.status_code == 404
        assert resp.json()["message"].startswith("Company profile not found")

    def test_payload_cannot_set_counters_or_owner(self, client, seed):
        owner = seed.user(role="company")
        company = seed.company(owner)
        other = seed.company(name="Other")
        profession = seed.profession("Plumber")

        resp = client.post(
            "/api/jobs",
            json={
                "profession": profession.id,
                "views": 500,
                "applicationsCount": 9,
                "company": other.id,
                "professionName": "Astronaut",
            },
            headers=auth(owner),
        )

        data = resp.json()["data"]
        assert data["views"] == 0
        assert data["applicationsCount"] == 0
        assert data["company"]["id"] == company.id
        assert data["professionName"] == "Plumber"

    def test_loose_payload_values_are_accepted(self, client, seed):
        owner = seed.user(role="company")
        seed.company(owner)
        profession = seed.profession("Lineman")

        resp = client.post(
            "/api/jobs",
            json={"profession": profession.id, "title": "Lineman", "salary": 55000, "description": None},
            headers=auth(owner),
        )

        assert resp.status_code == 201
        data = resp.json()["data"]
        assert data["salary"] == "55000"
        assert data["title"] == "Lineman"
        assert data["description"] == ""
        assert data["jobType"] == "full-time"

    def test_profession_rename_does_not_touch_snapshot(self, client, seed, db):
        owner = seed.user(role="company")
        seed.company(owner)
        profession = seed.profession("Electrician")
        job_id = client.post("/api/jobs", json={"profession": profession.id}, headers=auth(owner)).json()["data"]["id"]

        profession.name = "Electrical Technician"
        db.commit()

        assert client.get(f"/api/jobs/{job_id}").json()["data"]["professionName"] == "Electrician"

    def test_requires_identity(self, client, seed):
        profession = seed.profession()

        missing = client.post("/api/jobs", json={"profession": profession.id})
        unknown = client.post("/api/jobs", json={"profession": profession.id}, headers={"X-User-ID": "ghost"})

        assert missing.status_code == 401
        assert missing.json()["success"] is False
        assert unknown.status_code == 401

    def test_profession_is_required(self, client, seed):
        owner = seed.user(role="company")

        resp = client.post("/api/jobs", json={"title": "No profession"}, headers=auth(owner))

        assert resp.status_code == 400
        assert resp.json()["success"] is False
        assert "profession" in resp.json()["message"]


class TestApply:
    def _job(self, seed):
        return seed.job(seed.company(), seed.profession())

    def test_professional_applies(self, client, seed, db):
        job = self._job(seed)
        professional = seed.professional()

        resp = client.post(
            "/api/jobs/apply",
            json={"jobId": job.id, "professionalId": professional.id, "notes": "Available Monday"},
            headers=auth(seed.user()),
        )

        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Application submitted successfully"
        assert body["data"]["applicationsCount"] == 1
        [application] = body["data"]["applications"]
        assert application["professional"] == professional.id
        assert application["trainee"] is None
        assert application["status"] == "pending"
        assert application["notes"] == "Available Monday"

    def test_duplicate_professional_is_rejected(self, client, seed, db):
        job = self._job(seed)
        professional = seed.professional()
        headers = auth(seed.user())
        payload = {"jobId": job.id, "professionalId": professional.id}

        first = client.post("/api/jobs/apply", json=payload, headers=headers)
        second = client.post("/api/jobs/apply", json=payload, headers=headers)

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json() == {"success": False, "message": "Already applied to this job"}
        db.expire_all()
        assert db.get(Job, job.id).applications_count == 1
        assert db.query(Application).filter(Application.job_id == job.id).count() == 1

    def test_duplicate_trainee_is_rejected(self, client, seed):
        job = self._job(seed)
        trainee = seed.trainee()
        headers = auth(seed.user())
        payload = {"jobId": job.id, "traineeId": trainee.id}

        assert client.post("/api/jobs/apply", json=payload, headers=headers).status_code == 200
        resp = client.post("/api/jobs/apply", json=payload, headers=headers)

        assert resp.status_code == 400
        assert resp.json()["message"] == "Already applied to this job"

    def test_applications_keep_submission_order(self, client, seed):
        job = self._job(seed)
        headers = auth(seed.user())
        professional = seed.professional()
        trainee = seed.trainee()

        client.post("/api/jobs/apply", json={"jobId": job.id, "professionalId": professional.id}, headers=headers)
        resp = client.post("/api/jobs/apply", json={"jobId": job.id, "traineeId": trainee.id}, headers=headers)

        data = resp.json()["data"]
        assert data["applicationsCount"] == 2
        assert [a["professional"] for a in data["applications"]] == [professional.id, None]
        assert [a["trainee"] for a in data["applications"]] == [None, trainee.id]

    def test_exactly_one_applicant_required(self, client, seed):
        job = self._job(seed)
        headers = auth(seed.user())
        professional = seed.professional()
        trainee = seed.trainee()

        neither = client.post("/api/jobs/apply", json={"jobId": job.id}, headers=headers)
        both = client.post(
            "/api/jobs/apply",
            json={"jobId": job.id, "professionalId": professional.id, "traineeId": trainee.id},
            headers=headers,
        )

        for resp in (neither, both):
            assert resp.status_code == 400
            assert "exactly one" in resp.json()["message"]

    def test_unknown_job(self, client, seed):
        professional = seed.professional()

        resp = client.post(
            "/api/jobs/apply",
            json={"jobId": "missing", "professionalId": professional.id},
            headers=auth(seed.user()),
        )

        assert resp.status_code == 404
        assert resp.json()["message"] == "Job not found"

    def test_unknown_professional(self, client, seed):
        job = self._job(seed)

        resp = client.post(
            "/api/jobs/apply",
            json={"jobId": job.id, "professionalId": "missing"},
            headers=auth(seed.user()),
        )

        assert resp.status_code == 404
        assert resp.json()["message"] == "Professional not found"

    def test_requires_identity(self, client, seed):
        job = self._job(seed)
        professional = seed.professional()

        resp = client.post("/api/jobs/apply", json={"jobId": job.id, "professionalId": professional.id})

        assert resp.status_code == 401


class TestDownloadCV:
    def test_professional_cv(self, client, seed):
        professional = seed.professional(cv="uploads/cvs/cv-1.pdf", cv_file_name="sam.pdf")

        resp = client.get("/api/jobs/cv/download", params={"professionalId": professional.id}, headers=auth(seed.user()))

        assert resp.status_code == 200
        assert resp.json()["data"] == {"cvPath": "uploads/cvs/cv-1.pdf", "fileName": "sam.pdf"}

    def test_professional_cv_default_name(self, client, seed):
        professional = seed.professional(cv="uploads/cvs/cv-2.pdf")

        resp = client.get("/api/jobs/cv/download", params={"professionalId": professional.id}, headers=auth(seed.user()))

        assert resp.json()["data"]["fileName"] == "cv.pdf"

    def test_trainee_cv(self, client, seed):
        trainee = seed.trainee(cv="uploads/cvs/cv-3.pdf")

        resp = client.get("/api/jobs/cv/download", params={"traineeId": trainee.id}, headers=auth(seed.user()))

        assert resp.json()["data"] == {"cvPath": "uploads/cvs/cv-3.pdf", "fileName": "trainee-cv.pdf"}

    def test_missing_cv(self, client, seed):
        headers = auth(seed.user())
        without_cv = seed.professional()

        for params in ({"professionalId": without_cv.id}, {"traineeId": "missing"}, {}):
            resp = client.get("/api/jobs/cv/download", params=params, headers=headers)
            assert resp.status_code == 404
            assert resp.json() == {"success": False, "message": "CV not found"}

    def test_requires_identity(self, client, seed):
        professional = seed.professional(cv="uploads/cvs/cv-1.pdf")

        resp = client.get("/api/jobs/cv/download", params={"professionalId": professional.id})

        assert resp.status_code == 401


def test_health(client):
    assert client.get("/api/health").json() == {"success": True, "message": "Job Pool API is running"}
    assert client.get("/api").json()["success"] is True


class TestErrorEnvelope:
    def test_unexpected_error_is_a_500_envelope(self, client, monkeypatch):
        def broken(self, filters):
            raise RuntimeError("store down")

        monkeypatch.setattr(JobService, "list_jobs", broken)
        lenient = TestClient(app, raise_server_exceptions=False)

        resp = lenient.get("/api/jobs")

        assert resp.status_code == 500
        assert resp.json() == {"success": False, "message": "store down"}

    def test_apply_is_rate_limited(self, client, seed):
        headers = auth(seed.user())
        body = {"jobId": "missing", "professionalId": seed.professional().id}
        allowed = int(settings.apply_rate_limit.split("/")[0])

        for _ in range(allowed):
            assert client.post("/api/jobs/apply", json=body, headers=headers).status_code == 404

        resp = client.post("/api/jobs/apply", json=body, headers=headers)

        assert resp.status_code == 429
        assert resp.json()["success"] is False
        assert resp.json()["message"].startswith("Rate limit exceeded")
