import io
import unittest

import docx
from fastapi.testclient import TestClient

from TIV.main import app
from TIV.api.dependencies import get_session_service, get_admin_query_service, get_config, get_document_extractor
from packages.tiv_core.config import TIVConfig
from packages.tiv_oracle import MockOracleProvider, OracleClient
from packages.tiv_profile.base import IDocumentExtractor
from packages.tiv_profile.local_provider import DOCX_MIME
from packages.tiv_service.admin_query import AdminQueryService
from packages.tiv_service.concurrency import ConcurrencyManager
from packages.tiv_service.session_service import SessionService
from packages.tiv_session.infrastructure.memory_repo import MemorySessionRepository
from packages.tiv_session.policy import RegenerationMode, get_policy


class TestInterviewAPI(unittest.TestCase):
    def setUp(self):
        # Fresh store per test
        self.repo = MemorySessionRepository()
        self.provider = MockOracleProvider()
        oracle = OracleClient(self.provider)
        concurrency = ConcurrencyManager()

        app.dependency_overrides[get_session_service] = lambda: SessionService(
            state_repo=self.repo,
            oracle=oracle,
            policy=get_policy(RegenerationMode.REJECT),
            concurrency_manager=concurrency,
        )
        app.dependency_overrides[get_admin_query_service] = lambda: AdminQueryService(self.repo)
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def _start(self, candidate_id="cand_1"):
        response = self.client.post("/api/generate-questions", json={"candidateId": candidate_id, "role": "frontend"})
        self.assertEqual(response.status_code, 200)
        return response.json()["questions"]

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")
        self.assertIn("X-Request-ID", response.headers)

    def test_generate_questions_hides_answer_key(self):
        questions = self._start()
        self.assertEqual(len(questions), 6)
        self.assertEqual(questions[0]["time"], 20)
        for q in questions:
            self.assertNotIn("answer", q)
            self.assertNotIn("correctAnswer", q)

    def test_generate_questions_twice_conflicts(self):
        self._start()
        response = self.client.post("/api/generate-questions", json={"candidateId": "cand_1"})
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error"]["code"], "CONFLICT")

    def test_missing_fields(self):
        response = self.client.post("/api/generate-questions", json={"role": "frontend"})
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["error"]["code"], "MALFORMED_INPUT")
        self.assertIn("candidateId", body["error"]["detail"]["fields"])

    def test_save_answer_unknown_candidate(self):
        response = self.client.post(
            "/api/save-answer", json={"candidateId": "ghost", "questionId": 1, "answer": "x"}
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error"]["code"], "SESSION_NOT_FOUND")
        self.assertFalse(self.repo.exists("ghost"))

    def test_save_answer_duplicate(self):
        self._start()
        payload = {"candidateId": "cand_1", "questionId": 1, "answer": "JS syntax extension"}
        first = self.client.post("/api/save-answer", json=payload)
        second = self.client.post("/api/save-answer", json=dict(payload, answer="", autoSubmitted=True))

        self.assertEqual(first.json(), {"ok": True, "accepted": True})
        self.assertEqual(second.json(), {"ok": True, "accepted": False})

    def test_full_interview_flow(self):
        """Generate -> answer -> score -> profile -> dashboard."""
        self._start()
        answers = {1: "JS syntax extension", 2: "useState", 3: "wrong", 4: "GET", 6: "Concurrency model"}
        for qid, text in answers.items():
            response = self.client.post(
                "/api/save-answer",
                json={"candidateId": "cand_1", "questionId": qid, "answer": text, "timeTaken": 4.2},
            )
            self.assertEqual(response.status_code, 200)

        response = self.client.post("/api/score", json={"candidateId": "cand_1"})
        self.assertEqual(response.status_code, 200)
        result = response.json()
        # 4 correct MCQs, no subjective answer -> 40/60
        self.assertEqual(result["score"], 67)
        self.assertEqual(len(result["details"]), 6)
        self.assertEqual(result["details"][2]["result"], "wrong")
        self.assertEqual(result["details"][2]["correctAnswer"], "useEffect")
        self.assertEqual(result["details"][4]["result"], "no-answer")

        response = self.client.post(
            "/api/complete-profile",
            json={"candidateId": "cand_1", "profile": {"name": "Priya Sharma", "email": "p@x.io", "phone": "9876543210"}},
        )
        self.assertEqual(response.json(), {"ok": True})

        rows = self.client.get("/api/candidates").json()
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]["id"], "cand_1")
        self.assertEqual(rows[0]["name"], "Priya Sharma")
        self.assertEqual(rows[0]["score"], 67)
        self.assertEqual(rows[0]["status"], "completed")

        detail = self.client.get("/api/candidates/cand_1").json()
        self.assertEqual(detail["role"], "frontend")
        self.assertEqual(len(detail["answers"]), 5)
        self.assertEqual(detail["answers"][0]["timeTaken"], 4.2)
        self.assertEqual(detail["totalPoints"], 40)
        self.assertEqual(detail["maxPoints"], 60)

    def test_score_twice_returns_same_result(self):
        self._start()
        first = self.client.post("/api/score", json={"candidateId": "cand_1"}).json()
        second = self.client.post("/api/score", json={"candidateId": "cand_1"}).json()
        self.assertEqual(first, second)
        self.assertEqual(self.provider.calls["summarize"], 1)

    def test_score_unknown_candidate(self):
        response = self.client.post("/api/score", json={"candidateId": "ghost"})
        self.assertEqual(response.status_code, 404)

    def test_answer_after_completion_conflicts(self):
        self._start()
        self.client.post("/api/score", json={"candidateId": "cand_1"})
        response = self.client.post(
            "/api/save-answer", json={"candidateId": "cand_1", "questionId": 1, "answer": "late"}
        )
        self.assertEqual(response.status_code, 409)

    def test_unknown_candidate_detail(self):
        response = self.client.get("/api/candidates/ghost")
        self.assertEqual(response.status_code, 404)

    def test_complete_profile_requires_all_fields(self):
        response = self.client.post(
            "/api/complete-profile",
            json={"candidateId": "cand_1", "profile": {"name": "Priya", "email": "", "phone": "1"}},
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(self.repo.exists("cand_1"))


class TestResumeAPI(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_parse_docx(self):
        document = docx.Document()
        for line in ("Priya Sharma", "priya.sharma@example.com", "+91 98765 43210"):
            document.add_paragraph(line)
        buffer = io.BytesIO()
        document.save(buffer)

        response = self.client.post(
            "/api/parse-resume", files={"resume": ("cv.docx", buffer.getvalue(), DOCX_MIME)}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"name": "Priya Sharma", "email": "priya.sharma@example.com", "phone": "9876543210", "success": True},
        )

    def test_unsupported_format(self):
        response = self.client.post(
            "/api/parse-resume", files={"resume": ("cv.txt", b"Priya Sharma", "text/plain")}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "INVALID_FILE_FORMAT")

    def test_too_large(self):
        app.dependency_overrides[get_config] = lambda: TIVConfig(MAX_UPLOAD_BYTES=16)
        response = self.client.post(
            "/api/parse-resume", files={"resume": ("cv.pdf", b"%PDF-" + b"0" * 64, "application/pdf")}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"]["code"], "FILE_TOO_LARGE")

    def test_missing_file(self):
        response = self.client.post("/api/parse-resume")
        self.assertEqual(response.status_code, 400)

    def test_unexpected_error_keeps_request_id(self):
        """A 500 still carries the caller's request id in body and header."""
        app.dependency_overrides[get_document_extractor] = lambda: BrokenExtractor()
        response = self.client.post(
            "/api/parse-resume",
            files={"resume": ("cv.docx", b"content", DOCX_MIME)},
            headers={"X-Request-ID": "rid-1"},
        )
        self.assertEqual(response.status_code, 500)
        body = response.json()
        self.assertEqual(body["error"]["code"], "INTERNAL_SERVER_ERROR")
        self.assertEqual(body["request_id"], "rid-1")
        self.assertEqual(response.headers["X-Request-ID"], "rid-1")

    def test_client_error_keeps_request_id(self):
        response = self.client.post(
            "/api/parse-resume",
            files={"resume": ("cv.txt", b"text", "text/plain")},
            headers={"X-Request-ID": "rid-2"},
        )
        self.assertEqual(response.json()["request_id"], "rid-2")
        self.assertEqual(response.headers["X-Request-ID"], "rid-2")


class BrokenExtractor(IDocumentExtractor):
    def extract(self, document_bytes, mime_type, filename=None):
        raise RuntimeError("parser exploded")


if __name__ == "__main__":
    unittest.main()
