import base64
import os
import sys
import unittest
from pathlib import Path

# Keep API tests deterministic: no per-client throttling.
os.environ.setdefault("RATE_LIMIT_ENABLED", "0")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from resume_tools.core.rate_limit import reset_rate_limits  # noqa: E402
from resume_tools.main import app  # noqa: E402

RESUME_TEXT = (
    "Jane Doe\nSoftware Engineer\njane@example.com\n555-123-4567\n\n"
    "EXPERIENCE\nSenior Engineer | Acme Corp\nJan 2020 - Present\n- Built scalable APIs\n- Reduced latency by 40%\n\n"
    "EDUCATION\nMIT\nBachelor of Science in Computer Science, 2018\n\n"
    "SKILLS\nPython, Go, Docker"
)
JOB_DESCRIPTION = (
    "Job Title: Platform Engineer\n"
    "Requirements:\n- 5+ years with Python and Kubernetes\n- Strong communication skills\n"
    "Nice to have: Terraform, Go"
)


class ToolsApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        reset_rate_limits()

    def test_health(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy"})

    def test_cors_preflight_for_dev_origin(self):
        response = self.client.options(
            "/v1/tools/parse-text",
            headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers.get("access-control-allow-origin"), "http://localhost:3000")

    def test_parse_text_returns_camel_case_document(self):
        response = self.client.post("/v1/tools/parse-text", json={"text": RESUME_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()

        self.assertEqual(body["name"], "Jane Doe")
        self.assertEqual(body["rawText"], RESUME_TEXT)
        self.assertEqual(body["experience"][0]["startDate"], "Jan 2020")
        self.assertEqual(body["experience"][0]["endDate"], "Present")
        self.assertEqual(body["skills"], ["Python", "Go", "Docker"])

    def test_parse_text_without_content(self):
        response = self.client.post("/v1/tools/parse-text", json={"text": "   "})
        self.assertEqual(response.status_code, 422)

    def test_parse_resume_rejects_bad_base64(self):
        response = self.client.post("/v1/tools/parse-resume", json={"pdf": "%%%not-base64%%%"})
        self.assertEqual(response.status_code, 400)

    def test_score_ats_from_text(self):
        response = self.client.post("/v1/tools/score-ats", json={"text": RESUME_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()

        breakdown = body["breakdown"]
        self.assertEqual(
            body["overallScore"],
            breakdown["formatting"]
            + breakdown["sectionHeaders"]
            + breakdown["parseability"]
            + breakdown["keywordOptimization"],
        )
        self.assertIsInstance(body["issues"], list)
        self.assertIsInstance(body["passed"], list)

    def test_score_ats_requires_exactly_one_source(self):
        self.assertEqual(self.client.post("/v1/tools/score-ats", json={}).status_code, 422)
        both = {"text": RESUME_TEXT, "pdf": "JVBERi0="}
        self.assertEqual(self.client.post("/v1/tools/score-ats", json=both).status_code, 422)

    def test_score_ats_pdf_errors(self):
        bad_base64 = self.client.post("/v1/tools/score-ats", json={"pdf": "not base64!"})
        self.assertEqual(bad_base64.status_code, 400)

        not_a_pdf = base64.b64encode(b"this is not a pdf").decode("ascii")
        unreadable = self.client.post("/v1/tools/score-ats", json={"pdf": not_a_pdf})
        self.assertEqual(unreadable.status_code, 422)

    def test_extract_keywords(self):
        short = self.client.post("/v1/tools/extract-keywords", json={"job_description": "Python"})
        self.assertEqual(short.status_code, 400)

        response = self.client.post("/v1/tools/extract-keywords", json={"job_description": JOB_DESCRIPTION})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIn("Python", body["required_skills"])
        self.assertIn("Terraform", body["nice_to_have"])
        self.assertIn("communication", body["soft_skills"])

    def test_optimize_for_job_with_parsed_resume(self):
        parsed = self.client.post("/v1/tools/parse-text", json={"text": RESUME_TEXT})
        self.assertEqual(parsed.status_code, 200)

        for resume_data in (parsed.text, parsed.json()):
            with self.subTest(kind=type(resume_data).__name__):
                response = self.client.post(
                    "/v1/tools/optimize-for-job",
                    json={"resume_data": resume_data, "job_description": JOB_DESCRIPTION},
                )
                self.assertEqual(response.status_code, 200)
                body = response.json()
                self.assertIn("Python", body["matchedKeywords"])
                self.assertIn("Kubernetes", body["missingKeywords"])
                self.assertGreaterEqual(body["fitScore"], 0)
                self.assertLessEqual(body["fitScore"], 100)
                self.assertIsInstance(body["suggestions"], list)

    def test_optimize_for_job_rejects_invalid_json(self):
        response = self.client.post(
            "/v1/tools/optimize-for-job",
            json={"resume_data": "{broken", "job_description": JOB_DESCRIPTION},
        )
        self.assertEqual(response.status_code, 400)

    def test_upload_txt_resume(self):
        response = self.client.post(
            "/v1/tools/parse-resume/upload",
            files={"file": ("resume.txt", RESUME_TEXT.encode("utf-8"), "text/plain")},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["email"], "jane@example.com")

    def test_upload_rejects_unsupported_type(self):
        response = self.client.post(
            "/v1/tools/parse-resume/upload",
            files={"file": ("resume.exe", b"MZ\x90\x00", "application/octet-stream")},
        )
        self.assertEqual(response.status_code, 400)


if __name__ == "__main__":
    unittest.main()
