import json
import unittest

from packages.tiv_oracle import MockOracleProvider, OracleClient
from packages.tiv_oracle.base import IOracleProvider
from packages.tiv_oracle.client import check_structure
from packages.tiv_oracle.fallback import FALLBACK_QUESTIONS, FALLBACK_SUMMARY, TIME_LIMITS
from packages.tiv_session.dto import Answer
from packages.tiv_session.state import Difficulty, QuestionType


class StubProvider(IOracleProvider):
    """Returns canned payloads."""
    def __init__(self, questions: str = "", score: str = "", summary: str = ""):
        self.questions = questions
        self.score = score
        self.summary = summary

    async def generate(self, role: str) -> str:
        return self.questions

    async def score_text(self, question_text: str, answer_text: str) -> str:
        return self.score

    async def summarize(self, transcript: str, final_score: int) -> str:
        return self.summary


def _raw_set():
    """A valid 6-question payload delivered hard-first with bogus ids/times."""
    return [
        {"id": 9, "text": "Explain closures.", "difficulty": "hard", "type": "subjective", "time": 5},
        {"id": 8, "text": "Pick CSS box model", "difficulty": "hard", "type": "mcq",
         "options": ["a", "b"], "answer": "b", "time": 5},
        {"id": 7, "text": "What does map return?", "difficulty": "medium", "type": "mcq",
         "options": ["array", "object"], "answer": "array"},
        {"id": 6, "text": "Keyword for constants?", "difficulty": "easy", "type": "mcq",
         "options": ["let", "const"], "answer": "const"},
        {"id": 5, "text": "What is a Promise?", "difficulty": "medium", "type": "mcq",
         "options": ["value", "future value"], "answer": "future value"},
        {"id": 4, "text": "HTML stands for?", "difficulty": "easy", "type": "mcq",
         "options": ["HyperText Markup Language", "Other"], "answer": "HyperText Markup Language"},
    ]


class TestQuestionGeneration(unittest.IsolatedAsyncioTestCase):

    async def test_mock_provider_set_satisfies_contract(self):
        """The mock oracle produces a set passing the structural contract."""
        client = OracleClient(MockOracleProvider())
        questions = await client.generate_question_set("backend developer")

        self.assertEqual(check_structure(questions), "")
        self.assertEqual([q.id for q in questions], [1, 2, 3, 4, 5, 6])
        self.assertTrue(questions[0].text.startswith("[backend developer]"))

    async def test_normalises_order_ids_and_time_limits(self):
        """Questions are re-ordered easy -> medium -> hard and time limits follow difficulty."""
        client = OracleClient(StubProvider(questions=json.dumps(_raw_set())))
        questions = await client.generate_question_set("frontend")

        self.assertEqual(
            [q.difficulty for q in questions],
            [Difficulty.EASY, Difficulty.EASY, Difficulty.MEDIUM, Difficulty.MEDIUM, Difficulty.HARD, Difficulty.HARD],
        )
        self.assertEqual([q.id for q in questions], [1, 2, 3, 4, 5, 6])
        for q in questions:
            self.assertEqual(q.time_limit_seconds, TIME_LIMITS[q.difficulty])
        self.assertEqual(questions[0].text, "Keyword for constants?")
        self.assertIsNone(questions[4].correct_answer)

    async def test_accepts_fenced_and_wrapped_payload(self):
        payload = "```json\n" + json.dumps({"questions": _raw_set()}) + "\n```"
        client = OracleClient(StubProvider(questions=payload))
        questions = await client.generate_question_set("frontend")
        self.assertEqual(questions[0].text, "Keyword for constants?")

    async def test_provider_failure_uses_fallback_set(self):
        """An erroring oracle yields the fixed fallback set, never an error."""
        client = OracleClient(MockOracleProvider(should_fail=True))
        questions = await client.generate_question_set("anything")
        self.assertEqual(questions, list(FALLBACK_QUESTIONS))

    async def test_timeout_uses_fallback_set(self):
        client = OracleClient(MockOracleProvider(latency_ms=300), timeout_sec=0.05)
        questions = await client.generate_question_set("anything")
        self.assertEqual(questions, list(FALLBACK_QUESTIONS))

    async def test_malformed_json_uses_fallback_set(self):
        client = OracleClient(StubProvider(questions="Sure! Here are your questions: [oops"))
        questions = await client.generate_question_set("anything")
        self.assertEqual(questions, list(FALLBACK_QUESTIONS))

    async def test_contract_violations_use_fallback_set(self):
        """Wrong count, missing subjective question, or a bad answer key are all rejected."""
        too_few = _raw_set()[:5]

        no_subjective = _raw_set()
        no_subjective[0] = {"text": "Pick one", "difficulty": "hard", "type": "mcq",
                            "options": ["x", "y"], "answer": "x"}

        bad_key = _raw_set()
        bad_key[3] = dict(bad_key[3], answer="var")

        easy_subjective = _raw_set()
        easy_subjective[3] = {"text": "Describe let.", "difficulty": "easy", "type": "subjective"}

        for payload in (too_few, no_subjective, bad_key, easy_subjective):
            client = OracleClient(StubProvider(questions=json.dumps(payload)))
            questions = await client.generate_question_set("frontend")
            self.assertEqual(questions, list(FALLBACK_QUESTIONS))


class TestSubjectiveScoring(unittest.IsolatedAsyncioTestCase):

    async def test_valid_score(self):
        client = OracleClient(StubProvider(score='{"score": 7.5, "rationale": "Good depth"}'))
        result = await client.score_subjective("Q", "A")
        self.assertEqual(result.score, 7.5)
        self.assertEqual(result.rationale, "Good depth")

    async def test_failure_returns_default_score(self):
        client = OracleClient(MockOracleProvider(should_fail=True))
        result = await client.score_subjective("Q", "A long enough answer")
        self.assertEqual(result.score, 5)
        self.assertEqual(result.rationale, "Default fallback score.")

    async def test_out_of_range_score_returns_default(self):
        client = OracleClient(StubProvider(score='{"score": 42, "rationale": "?"}'))
        result = await client.score_subjective("Q", "A")
        self.assertEqual(result.score, 5)

    async def test_non_numeric_score_returns_default(self):
        """Booleans and numeric strings are not scores."""
        for payload in ('{"score": true, "rationale": "x"}', '{"score": "7", "rationale": "x"}'):
            client = OracleClient(StubProvider(score=payload))
            result = await client.score_subjective("Q", "A")
            self.assertEqual(result.score, 5)
            self.assertEqual(result.rationale, "Default fallback score.")

    async def test_integer_score(self):
        client = OracleClient(StubProvider(score='{"score": 8, "rationale": "Solid"}'))
        result = await client.score_subjective("Q", "A")
        self.assertEqual(result.score, 8)

    async def test_missing_fields_return_default(self):
        client = OracleClient(StubProvider(score='{"rationale": "no score"}'))
        result = await client.score_subjective("Q", "A")
        self.assertEqual(result.rationale, "Default fallback score.")


class TestSummary(unittest.IsolatedAsyncioTestCase):

    async def test_summary_text(self):
        client = OracleClient(MockOracleProvider())
        summary = await client.summarize(list(FALLBACK_QUESTIONS), [], 50)
        self.assertEqual(summary, "The candidate finished the interview with a score of 50%.")

    async def test_failure_returns_fallback_summary(self):
        client = OracleClient(MockOracleProvider(should_fail=True))
        answers = [Answer(question_id=1, text="JS syntax extension")]
        summary = await client.summarize(list(FALLBACK_QUESTIONS), answers, 17)
        self.assertEqual(summary, FALLBACK_SUMMARY)

    async def test_empty_summary_returns_fallback(self):
        client = OracleClient(StubProvider(summary="   "))
        summary = await client.summarize(list(FALLBACK_QUESTIONS), [], 0)
        self.assertEqual(summary, FALLBACK_SUMMARY)


class TestStructureCheck(unittest.TestCase):

    def test_fallback_set_is_valid(self):
        self.assertEqual(check_structure(list(FALLBACK_QUESTIONS)), "")

    def test_fallback_set_shape(self):
        """The hard band carries at least one subjective question."""
        hard = [q for q in FALLBACK_QUESTIONS if q.difficulty == Difficulty.HARD]
        self.assertIn(QuestionType.SUBJECTIVE, [q.type for q in hard])

    def test_short_set_is_invalid(self):
        self.assertNotEqual(check_structure(list(FALLBACK_QUESTIONS)[:4]), "")


if __name__ == "__main__":
    unittest.main()
