"""
HTTP tests for /api/applications.
"""

from datetime import date, timedelta

from models import Role
from models1.jobs import JobPosting


class TestSubmitEndpoint:

    def test_submit_returns_201_envelope(self, client, factory, headers_for):
        applicant = factory.applicant()
        job = factory.job()

        res = client.post(
            "/api/applications",
            json={"job_posting_id": job.id, "screening_answers": ["Yes", "3 years"]},
            headers=headers_for(applicant, Role.APPLICANT),
        )

        assert res.status_code == 201
        body = res.json()
        assert body["message"] == "Application submitted successfully"
        assert body["application"]["status"] == "SUBMITTED"
        assert body["application"]["resume_url"] == "http://r.example/cv.pdf"
        assert body["application"]["screening_answers"] == ["Yes", "3 years"]

    def test_duplicate_maps_to_409(self, client, db, factory, headers_for):
        applicant = factory.applicant()
        job = factory.job()
        headers = headers_for(applicant, Role.APPLICANT)

        first = client.post("/api/applications", json={"job_posting_id": job.id}, headers=headers)
        second = client.post("/api/applications", json={"job_posting_id": job.id}, headers=headers)

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json() == {"detail": "You have already applied to this job"}
        db.expire_all()
        assert db.get(JobPosting, job.id).application_count == 1

    def test_incomplete_profile_maps_to_403(self, client, factory, headers_for):
        applicant = factory.applicant(complete=False)
        job = factory.job()

        res = client.post("/api/applications", json={"job_posting_id": job.id},
                          headers=headers_for(applicant, Role.APPLICANT))

        assert res.status_code == 403

    def test_passed_deadline_maps_to_400(self, client, factory, headers_for):
        applicant = factory.applicant()
        job = factory.job(deadline=date.today() - timedelta(days=2))

        res = client.post("/api/applications", json={"job_posting_id": job.id},
                          headers=headers_for(applicant, Role.APPLICANT))

        assert res.status_code == 400
        assert res.json()["detail"] == "Application deadline has passed"

    def test_unknown_job_maps_to_404(self, client, factory, headers_for):
        applicant = factory.applicant()

        res = client.post("/api/applications", json={"job_posting_id": 4242},
                          headers=headers_for(applicant, Role.APPLICANT))

        assert res.status_code == 404

    def test_employer_role_cannot_submit(self, client, factory, headers_for):
        applicant = factory.applicant()
        job = factory.job()

        res = client.post("/api/applications", json={"job_posting_id": job.id},
                          headers=headers_for(applicant, Role.EMPLOYER))

        assert res.status_code == 403

    def test_requires_token(self, client, factory):
        job = factory.job()

        res = client.post("/api/applications", json={"job_posting_id": job.id})

        assert res.status_code == 401

    def test_missing_job_id_is_422(self, client, factory, headers_for):
        applicant = factory.applicant()

        res = client.post("/api/applications", json={}, headers=headers_for(applicant, Role.APPLICANT))

        assert res.status_code == 422


class TestLifecycleEndpoints:

    def _apply(self, client, factory, headers_for):
        applicant = factory.applicant()
        employer = factory.employer()
        job = factory.job(employer=employer)
        res = client.post("/api/applications", json={"job_posting_id": job.id},
                          headers=headers_for(applicant, Role.APPLICANT))
        return res.json()["application"], applicant, employer, job

    def test_employer_moves_status_and_reads_activities(self, client, factory, headers_for):
        application, applicant, employer, _ = self._apply(client, factory, headers_for)
        employer_headers = headers_for(employer, Role.EMPLOYER)

        res = client.patch(f"/api/applications/{application['id']}/status",
                           json={"status": "SHORTLISTED"}, headers=employer_headers)
        assert res.status_code == 200
        assert res.json()["application"]["status"] == "SHORTLISTED"

        res = client.get(f"/api/applications/{application['id']}/activities",
                         headers=headers_for(applicant, Role.APPLICANT))
        body = res.json()
        assert body["count"] == 2
        assert body["activities"][0]["action"] == "status_changed"
        assert body["activities"][0]["old_status"] == "SUBMITTED"
        assert body["activities"][0]["new_status"] == "SHORTLISTED"

    def test_unknown_status_is_422(self, client, factory, headers_for):
        application, _, employer, _ = self._apply(client, factory, headers_for)

        res = client.patch(f"/api/applications/{application['id']}/status",
                           json={"status": "HIRED"}, headers=headers_for(employer, Role.EMPLOYER))

        assert res.status_code == 422

    def test_foreign_employer_gets_403(self, client, factory, headers_for):
        application, _, _, _ = self._apply(client, factory, headers_for)
        intruder = factory.employer()

        res = client.patch(f"/api/applications/{application['id']}/status",
                           json={"status": "REJECTED"}, headers=headers_for(intruder, Role.EMPLOYER))

        assert res.status_code == 403

    def test_add_note(self, client, factory, headers_for):
        application, _, employer, _ = self._apply(client, factory, headers_for)

        res = client.post(f"/api/applications/{application['id']}/notes",
                          json={"notes": "Great portfolio"}, headers=headers_for(employer, Role.EMPLOYER))

        assert res.status_code == 201
        assert res.json()["activity"]["action"] == "note_added"

    def test_withdraw_twice(self, client, db, factory, headers_for):
        application, applicant, _, job = self._apply(client, factory, headers_for)
        headers = headers_for(applicant, Role.APPLICANT)

        first = client.delete(f"/api/applications/{application['id']}", headers=headers)
        second = client.delete(f"/api/applications/{application['id']}", headers=headers)

        assert first.status_code == 200
        assert first.json()["application"]["status"] == "WITHDRAWN"
        assert second.status_code == 400
        assert second.json()["detail"] == "Cannot withdraw application with status: WITHDRAWN"
        db.expire_all()
        assert db.get(JobPosting, job.id).application_count == 0

    def test_get_application_owner_only(self, client, factory, headers_for):
        application, applicant, employer, _ = self._apply(client, factory, headers_for)

        assert client.get(f"/api/applications/{application['id']}",
                          headers=headers_for(applicant, Role.APPLICANT)).status_code == 200
        assert client.get(f"/api/applications/{application['id']}",
                          headers=headers_for(employer, Role.EMPLOYER)).status_code == 200
        stranger = factory.user()
        assert client.get(f"/api/applications/{application['id']}",
                          headers=headers_for(stranger, Role.APPLICANT)).status_code == 403
        assert client.get("/api/applications/9999",
                          headers=headers_for(applicant, Role.APPLICANT)).status_code == 404


class TestListingEndpoints:

    def test_my_applications_statistics_and_check(self, client, factory, headers_for):
        applicant = factory.applicant()
        job = factory.job()
        other_job = factory.job()
        headers = headers_for(applicant, Role.APPLICANT)
        client.post("/api/applications", json={"job_posting_id": job.id}, headers=headers)

        listing = client.get("/api/applications/my-applications", headers=headers).json()
        assert listing["count"] == 1
        assert listing["applications"][0]["job_posting_id"] == job.id

        stats = client.get("/api/applications/my-applications/statistics", headers=headers).json()
        assert stats["totalApplications"] == 1
        assert stats["submitted"] == 1

        assert client.get(f"/api/applications/check/{job.id}", headers=headers).json() == {"hasApplied": True}
        assert client.get(f"/api/applications/check/{other_job.id}", headers=headers).json() == {"hasApplied": False}

    def test_my_applications_status_filter(self, client, factory, headers_for):
        applicant = factory.applicant()
        headers = headers_for(applicant, Role.APPLICANT)
        client.post("/api/applications", json={"job_posting_id": factory.job().id}, headers=headers)

        res = client.get("/api/applications/my-applications", params={"status": "REJECTED"}, headers=headers)

        assert res.json() == {"applications": [], "count": 0}

    def test_limit_bounds(self, client, factory, headers_for):
        applicant = factory.applicant()

        res = client.get("/api/applications/my-applications", params={"limit": 0},
                         headers=headers_for(applicant, Role.APPLICANT))

        assert res.status_code == 422

    def test_job_and_employer_listings(self, client, factory, headers_for):
        employer = factory.employer()
        job = factory.job(employer=employer)
        for _ in range(2):
            applicant = factory.applicant()
            client.post("/api/applications", json={"job_posting_id": job.id},
                        headers=headers_for(applicant, Role.APPLICANT))
        headers = headers_for(employer, Role.EMPLOYER)

        assert client.get(f"/api/applications/job/{job.id}", headers=headers).json()["count"] == 2
        assert client.get("/api/applications/employer/all", headers=headers).json()["count"] == 2
        assert client.get("/api/applications/employer/all", params={"job_posting_id": job.id},
                          headers=headers).json()["count"] == 2

        outsider = factory.employer()
        res = client.get(f"/api/applications/job/{job.id}", headers=headers_for(outsider, Role.EMPLOYER))
        assert res.status_code == 403

    def test_dual_role_user_uses_both_sides(self, client, factory, headers_for):
        """One principal holding both roles can apply elsewhere and review its own job."""
        user = factory.user()
        applicant = factory.applicant(user=user)
        employer = factory.employer(user=user)
        own_job = factory.job(employer=employer)
        other_job = factory.job()
        headers = headers_for(user, Role.APPLICANT, Role.EMPLOYER)

        own = client.post("/api/applications", json={"job_posting_id": own_job.id}, headers=headers)
        other = client.post("/api/applications", json={"job_posting_id": other_job.id}, headers=headers)

        assert own.status_code == 400
        assert other.status_code == 201
        assert client.get(f"/api/applications/job/{own_job.id}", headers=headers).json()["count"] == 0
        assert applicant.user_id == employer.user_id
