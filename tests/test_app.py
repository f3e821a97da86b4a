"""
API tests against a throwaway SQLite database.
"""

import os
import tempfile
import unittest

_DATA_DIR = tempfile.mkdtemp(prefix="resume-matcher-")
os.environ["BASE_DIR"] = _DATA_DIR

from fastapi.testclient import TestClient  # noqa: E402

from app import app, get_importer  # noqa: E402
from parsers.linkedin import MockProfileImporter  # noqa: E402


SAMPLE_RESUME = """Priya Sharma
priya.sharma@example.com | +91 98765 43210 | Mumbai
Bachelor of Technology in Computer Science
Indian Institute of Technology Bombay, 2022
Frontend Developer
Acme Labs
Built React and JavaScript dashboards, 2022 - Present
Skills: React, JavaScript, HTML, CSS, Git
"""


class APITestCase(unittest.TestCase):

    def setUp(self):
        self.db_dir = tempfile.TemporaryDirectory()
        os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(self.db_dir.name, 'test.db')}"
        app.dependency_overrides[get_importer] = MockProfileImporter
        self.client_context = TestClient(app)
        self.client = self.client_context.__enter__()

    def tearDown(self):
        self.client_context.__exit__(None, None, None)
        app.dependency_overrides.clear()
        os.environ.pop("DATABASE_URL", None)
        self.db_dir.cleanup()

    def upload_resume(self, user_id="u1"):
        response = self.client.post(
            "/resumes/upload",
            files={"resume": ("resume.txt", SAMPLE_RESUME.encode("utf-8"), "text/plain")},
            data={"user_id": user_id},
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def seed_jobs(self):
        response = self.client.post("/jobs/seed")
        self.assertEqual(response.status_code, 200)
        return response.json()["inserted"]


class TestResumeEndpoints(APITestCase):

    def test_parse_text(self):
        response = self.client.post("/resumes/parse", json={"text": SAMPLE_RESUME})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIn("react", body["skills"])
        self.assertEqual(body["contact_info"]["email"], "priya.sharma@example.com")
        self.assertEqual(body["education"]["graduation_year"], 2022)

    def test_upload_and_list(self):
        resume = self.upload_resume()
        self.assertEqual(resume["file_name"], "resume.txt")
        self.assertEqual(resume["user_id"], "u1")
        self.assertIn("javascript", resume["skills"])

        listed = self.client.get("/resumes", params={"user_id": "u1"}).json()
        self.assertEqual([r["id"] for r in listed], [resume["id"]])
        self.assertEqual(self.client.get("/resumes", params={"user_id": "other"}).json(), [])

    def test_upload_unsupported_format(self):
        response = self.client.post(
            "/resumes/upload",
            files={"resume": ("resume.pdf", b"%PDF-1.4", "application/pdf")},
        )
        self.assertEqual(response.status_code, 400)

    def test_linkedin_import(self):
        response = self.client.post(
            "/resumes/import/linkedin",
            json={"url": "https://www.linkedin.com/in/john-doe", "user_id": "u2"},
        )
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["file_name"], "LinkedIn_Profile_john-doe.txt")
        self.assertEqual(body["job_level"], "entry")
        self.assertEqual(body["years_of_experience"], 3.0)

    def test_linkedin_import_invalid_url(self):
        response = self.client.post("/resumes/import/linkedin", json={"url": "https://example.com/john"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Invalid LinkedIn URL format")

    def test_get_missing_resume(self):
        self.assertEqual(self.client.get("/resumes/999").status_code, 404)

    def test_update_level(self):
        resume = self.upload_resume()
        response = self.client.patch(
            f"/resumes/{resume['id']}/level",
            json={"job_level": "senior", "years_of_experience": 8},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["job_level"], "senior")
        self.assertEqual(response.json()["years_of_experience"], 8)

        response = self.client.patch(f"/resumes/{resume['id']}/level", json={"job_level": "mid"})
        self.assertEqual(response.json()["years_of_experience"], 8)

    def test_update_level_rejects_unknown_level(self):
        resume = self.upload_resume()
        response = self.client.patch(f"/resumes/{resume['id']}/level", json={"job_level": "guru"})
        self.assertEqual(response.status_code, 422)


class TestJobEndpoints(APITestCase):

    def test_create_job_derives_details(self):
        response = self.client.post("/jobs", json={
            "title": "Backend Engineer",
            "company": "Globex",
            "description": "Python and Docker, 4 years experience",
            "location": "Pune",
        })
        self.assertEqual(response.status_code, 200, response.text)
        job = response.json()
        self.assertEqual(job["required_skills"], ["python", "docker"])
        self.assertEqual(job["experience_level"], "mid")
        self.assertEqual(job["source"], "manual")

        self.assertEqual(self.client.get(f"/jobs/{job['id']}").json()["title"], "Backend Engineer")

    def test_create_job_derives_location(self):
        response = self.client.post("/jobs", json={
            "title": "Dev",
            "company": "X",
            "description": "Python role, fully remote",
        })
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["location"], "Remote")

        job = self.client.post("/jobs", json={
            "title": "Dev",
            "company": "X",
            "description": "Python role in Chennai",
        }).json()
        self.assertEqual(job["location"], "Chennai")

        job = self.client.post("/jobs", json={
            "title": "Dev",
            "company": "X",
            "description": "Python role",
        }).json()
        self.assertEqual(job["location"], "")

    def test_create_job_keeps_given_details(self):
        job = self.client.post("/jobs", json={
            "title": "Intern",
            "company": "Globex",
            "description": "Learn Python",
            "required_skills": ["Go"],
            "location": "Delhi",
            "experience_level": "entry",
        }).json()
        self.assertEqual(job["required_skills"], ["Go"])
        self.assertEqual(job["experience_level"], "entry")

    def test_seed_search_and_recent(self):
        inserted = self.seed_jobs()
        self.assertEqual(inserted, 5)

        found = self.client.get("/jobs/search", params={"q": "frontend"}).json()
        self.assertEqual([j["title"] for j in found], ["Frontend Developer"])

        remote = self.client.get("/jobs/search", params={"location": "remote"}).json()
        self.assertEqual([j["company"] for j in remote], ["InsightAI"])

        mid = self.client.get("/jobs/search", params={"experience_level": "mid"}).json()
        self.assertEqual(len(mid), 2)

        recent = self.client.get("/jobs/recent", params={"limit": 2}).json()
        self.assertEqual(len(recent), 2)

    def test_missing_job(self):
        self.assertEqual(self.client.get("/jobs/999").status_code, 404)


class TestMatchingEndpoints(APITestCase):

    def test_recommendations(self):
        resume = self.upload_resume()
        self.seed_jobs()
        ranked = self.client.get(f"/resumes/{resume['id']}/recommendations").json()
        self.assertEqual(len(ranked), 5)
        scores = [r["compatibility_score"] for r in ranked]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertEqual(ranked[0]["job"]["title"], "Frontend Developer")
        self.assertTrue(ranked[0]["match_reasons"])

    def test_analysis_round_trip_and_cascade(self):
        resume = self.upload_resume()
        self.seed_jobs()
        job = self.client.get("/jobs/search", params={"q": "frontend"}).json()[0]

        response = self.client.post("/analysis", json={"resume_id": resume["id"], "job_id": job["id"]})
        self.assertEqual(response.status_code, 200, response.text)
        analysis = response.json()
        self.assertGreaterEqual(analysis["match_score"], 0)
        self.assertLessEqual(analysis["match_score"], 100)
        self.assertIn("react", analysis["matching_skills"])
        self.assertIn("typescript", analysis["missing_skills"])

        stored = self.client.get(f"/resumes/{resume['id']}/analysis").json()
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0]["job"]["title"], "Frontend Developer")
        self.assertEqual(stored[0]["match_score"], analysis["match_score"])

        self.assertEqual(self.client.delete(f"/resumes/{resume['id']}").status_code, 200)
        self.assertEqual(self.client.get(f"/resumes/{resume['id']}").status_code, 404)
        self.assertEqual(self.client.get(f"/resumes/{resume['id']}/analysis").status_code, 404)

    def test_analysis_missing_records(self):
        resume = self.upload_resume()
        response = self.client.post("/analysis", json={"resume_id": resume["id"], "job_id": 999})
        self.assertEqual(response.status_code, 404)


if __name__ == "__main__":
    unittest.main()
