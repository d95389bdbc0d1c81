import base64
import unittest
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from portfolio_resume.config import settings
from portfolio_resume.exceptions import ExtractionSourceError
from portfolio_resume.main import app
from portfolio_resume.services.content_gate import ContentAssessment

from fixtures import PORTFOLIO_TEXT, SAMPLE_PAYLOAD, model_json, resume_from_editor_prompt

SCRAPE = "portfolio_resume.services.scraper_service.extract_content"
ASSESS = "portfolio_resume.services.content_gate.assess"
COMPLETE = "portfolio_resume.services.extraction_service.complete"

HEADERS = {"X-Groq-Key": "test-key"}


class ResumeApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_health(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_generate_resume_contract(self):
        with patch(SCRAPE, new=AsyncMock(return_value=PORTFOLIO_TEXT)), \
                patch(ASSESS, new=AsyncMock(return_value=ContentAssessment(valid=True))), \
                patch(COMPLETE, new=AsyncMock(return_value=model_json(SAMPLE_PAYLOAD))):
            response = self.client.post(
                "/api/generate-resume",
                json={"url": "https://example.dev", "mode": "scrape"},
                headers=HEADERS,
            )

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertTrue(base64.b64decode(body["pdf"]).startswith(b"%PDF"))
        self.assertEqual(body["resumeData"]["name"], "Ada Lovelace")
        self.assertEqual(len(body["resumeData"]["experience"]), 2)
        self.assertEqual(body["resumeData"]["experience"][0]["startDate"], "1842")
        self.assertEqual(body["fileName"], "ada-lovelace-resume.pdf")

    def test_generate_requires_url(self):
        with patch(SCRAPE, new=AsyncMock()) as scrape:
            response = self.client.post("/api/generate-resume", json={}, headers=HEADERS)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "URL is required")
        scrape.assert_not_awaited()

    def test_generate_rejects_malformed_url(self):
        response = self.client.post("/api/generate-resume", json={"url": "not-a-url"}, headers=HEADERS)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid URL format")

    def test_generate_rejects_unknown_mode(self):
        response = self.client.post(
            "/api/generate-resume",
            json={"url": "https://example.dev", "mode": "everything"},
            headers=HEADERS,
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["errorType"], "invalid_input")

    def test_generate_without_key_is_configuration_error(self):
        with patch.object(settings, "groq_api_key", None), \
                patch.object(settings, "llm_provider", "groq"), \
                patch(SCRAPE, new=AsyncMock()) as scrape:
            response = self.client.post("/api/generate-resume", json={"url": "https://example.dev"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["errorType"], "configuration")
        scrape.assert_not_awaited()

    def test_blocked_site_is_tagged(self):
        blocked = ExtractionSourceError(
            "This website cannot be accessed",
            details="The website is protected",
            blocked=True,
        )
        with patch(SCRAPE, new=AsyncMock(side_effect=blocked)):
            response = self.client.post(
                "/api/generate-resume", json={"url": "https://example.dev"}, headers=HEADERS
            )
        self.assertEqual(response.status_code, 403)
        body = response.json()
        self.assertEqual(body["errorType"], "blocklisted")
        self.assertEqual(body["details"], "The website is protected")

    def test_generic_scrape_failure_is_not_blocklisted(self):
        failure = ExtractionSourceError("Failed to scrape website: HTTP 500")
        with patch(SCRAPE, new=AsyncMock(side_effect=failure)):
            response = self.client.post(
                "/api/generate-resume", json={"url": "https://example.dev"}, headers=HEADERS
            )
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["errorType"], "source_unavailable")

    def test_empty_content_error(self):
        with patch(SCRAPE, new=AsyncMock(return_value="   ")), \
                patch(COMPLETE, new=AsyncMock()) as complete:
            response = self.client.post(
                "/api/generate-resume", json={"url": "https://example.dev"}, headers=HEADERS
            )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["errorType"], "no_content")
        complete.assert_not_awaited()

    def test_insufficient_content_error(self):
        verdict = ContentAssessment(valid=False, reason="No name or professional details")
        with patch(SCRAPE, new=AsyncMock(return_value="Coming soon")), \
                patch(ASSESS, new=AsyncMock(return_value=verdict)):
            response = self.client.post(
                "/api/generate-resume", json={"url": "https://example.dev"}, headers=HEADERS
            )
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["error"], "Insufficient content for resume")
        self.assertEqual(body["details"], "No name or professional details")

    def test_modify_resume_adds_skill(self):
        async def add_rust(**kwargs):
            data = resume_from_editor_prompt(kwargs["messages"])
            data["skills"].append("Rust")
            return model_json(data)

        with patch(COMPLETE, new=add_rust):
            response = self.client.post(
                "/api/modify-resume",
                json={"resumeData": SAMPLE_PAYLOAD, "modification": "add a skill: Rust"},
                headers=HEADERS,
            )

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(sorted(body["resumeData"]["skills"]), ["Go", "Rust"])
        self.assertEqual(body["resumeData"]["name"], "Ada Lovelace")
        self.assertEqual(body["fileName"], "ada-lovelace-resume-modified.pdf")

    def test_modify_requires_resume_and_instruction(self):
        response = self.client.post("/api/modify-resume", json={"modification": "x"}, headers=HEADERS)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Resume data is required")

        response = self.client.post("/api/modify-resume", json={"resumeData": SAMPLE_PAYLOAD}, headers=HEADERS)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Modification request is required")

    def test_modify_model_failure(self):
        with patch(COMPLETE, new=AsyncMock(return_value="")):
            response = self.client.post(
                "/api/modify-resume",
                json={"resumeData": SAMPLE_PAYLOAD, "modification": "add a skill: Rust"},
                headers=HEADERS,
            )
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["errorType"], "mutation_failed")

    def test_render_docx_download(self):
        response = self.client.post("/api/render", json={"resumeData": SAMPLE_PAYLOAD, "format": "docx"})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.content.startswith(b"PK"))
        self.assertIn("ada-lovelace-resume.docx", response.headers["content-disposition"])

    def test_provider_registry(self):
        response = self.client.get("/api/llm/providers")
        self.assertEqual(response.status_code, 200)
        ids = [p["id"] for p in response.json()["providers"]]
        self.assertEqual(ids, ["groq", "google", "openrouter"])


if __name__ == "__main__":
    unittest.main()
