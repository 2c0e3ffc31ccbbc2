import asyncio
import json
from typing import Awaitable, Callable, List

from pydantic import ValidationError

from packages.tiv_core.logging import get_logger
from packages.tiv_session.dto import Question, Answer
from packages.tiv_session.state import Difficulty, QuestionType
from .base import IOracleProvider
from .result import OracleResult
from .schema import RawQuestion, SubjectiveScore
from .prompts import build_transcript, clean_json_string
from .fallback import (
    TIME_LIMITS,
    DEFAULT_SUBJECTIVE_SCORE,
    FALLBACK_SUMMARY,
    fallback_question_set,
)

QUESTION_COUNT = 6
_DIFFICULTY_ORDER = {Difficulty.EASY: 0, Difficulty.MEDIUM: 1, Difficulty.HARD: 2}


class OracleClient:
    """
    Boundary to the Question/Scoring Oracle.
    Every operation is total: failures (timeout, provider error, malformed
    payload, contract violation) are mapped to a documented fallback value.
    """
    def __init__(self, provider: IOracleProvider, timeout_sec: float = 30.0):
        self.provider = provider
        self.timeout_sec = timeout_sec
        self.logger = get_logger("TIV.oracle.client")

    # ------------------- Public operations -------------------
    async def generate_question_set(self, role: str) -> List[Question]:
        raw = await self._call("generate", lambda: self.provider.generate(role))
        result = self._parse_question_set(raw) if raw.success else raw
        if not result.success:
            self.logger.warning(f"Question generation failed for role '{role}': {result.error}. Using fallback set.")
        return result.unwrap_or(fallback_question_set())

    async def score_subjective(self, question_text: str, answer_text: str) -> SubjectiveScore:
        raw = await self._call("score_text", lambda: self.provider.score_text(question_text, answer_text))
        result = self._parse_score(raw) if raw.success else raw
        if not result.success:
            self.logger.warning(f"Subjective scoring failed: {result.error}. Using default score.")
        return result.unwrap_or(DEFAULT_SUBJECTIVE_SCORE.model_copy())

    async def summarize(self, questions: List[Question], answers: List[Answer], final_score_percent: int) -> str:
        transcript = build_transcript(questions, answers)
        raw = await self._call("summarize", lambda: self.provider.summarize(transcript, final_score_percent))
        if not raw.success:
            self.logger.warning(f"Summary generation failed: {raw.error}. Using fallback summary.")
        return raw.unwrap_or(FALLBACK_SUMMARY)

    # ------------------- Provider call -------------------
    async def _call(self, op: str, call: Callable[[], Awaitable[str]]) -> OracleResult[str]:
        """Bounded provider call. Never raises."""
        try:
            payload = await asyncio.wait_for(call(), timeout=self.timeout_sec)
        except asyncio.TimeoutError:
            return OracleResult.err(f"{op} timed out after {self.timeout_sec}s")
        except Exception as e:
            return OracleResult.err(f"{op} raised {type(e).__name__}: {e}")

        if not isinstance(payload, str) or not payload.strip():
            return OracleResult.err(f"{op} returned an empty payload")
        return OracleResult.ok(payload.strip())

    # ------------------- Normalisation -------------------
    def _parse_question_set(self, raw: OracleResult[str]) -> OracleResult[List[Question]]:
        try:
            data = json.loads(clean_json_string(raw.payload))
        except json.JSONDecodeError as e:
            return OracleResult.err(f"question payload is not JSON: {e}")

        if isinstance(data, dict):
            data = data.get("questions")
        if not isinstance(data, list):
            return OracleResult.err("question payload is not a list")
        if len(data) != QUESTION_COUNT:
            return OracleResult.err(f"expected {QUESTION_COUNT} questions, got {len(data)}")

        try:
            items = [RawQuestion.model_validate(item) for item in data]
        except ValidationError as e:
            return OracleResult.err(f"question schema violation: {e.error_count()} errors")

        # Delivery order easy -> medium -> hard, stable inside a band
        items.sort(key=lambda item: _DIFFICULTY_ORDER[item.difficulty])

        questions = []
        try:
            for i, item in enumerate(items, start=1):
                is_mcq = item.type == QuestionType.MCQ
                if is_mcq and (not item.options or item.answer not in item.options):
                    return OracleResult.err(f"mcq question {i} has no valid answer key")
                questions.append(
                    Question(
                        id=i,
                        text=item.text,
                        difficulty=item.difficulty,
                        type=item.type,
                        options=item.options if is_mcq else None,
                        correct_answer=item.answer if is_mcq else None,
                        time_limit_seconds=TIME_LIMITS[item.difficulty],
                    )
                )
        except ValidationError as e:
            return OracleResult.err(f"question schema violation: {e.error_count()} errors")

        violation = check_structure(questions)
        if violation:
            return OracleResult.err(f"structural contract violated: {violation}")
        return OracleResult.ok(questions)

    def _parse_score(self, raw: OracleResult[str]) -> OracleResult[SubjectiveScore]:
        try:
            return OracleResult.ok(SubjectiveScore.model_validate_json(clean_json_string(raw.payload)))
        except ValidationError as e:
            return OracleResult.err(f"score payload invalid: {e.error_count()} errors")


def check_structure(questions: List[Question]) -> str:
    """
    Validate the 6-question contract.
    Returns an empty string when satisfied, otherwise the first violation.
    """
    if len(questions) != QUESTION_COUNT:
        return f"expected {QUESTION_COUNT} questions"

    by_level = {level: [q for q in questions if q.difficulty == level] for level in Difficulty}

    for level in (Difficulty.EASY, Difficulty.MEDIUM):
        band = by_level[level]
        if len(band) != 2 or any(q.type != QuestionType.MCQ for q in band):
            return f"need 2 {level.value} mcq questions"

    hard = by_level[Difficulty.HARD]
    if len(hard) != 2:
        return "need 2 hard questions"
    if sum(q.type == QuestionType.SUBJECTIVE for q in hard) < 1:
        return "need at least 1 hard subjective question"
    if sum(q.type == QuestionType.MCQ for q in hard) > 1:
        return "need at most 1 hard mcq question"

    for q in questions:
        if q.time_limit_seconds != TIME_LIMITS[q.difficulty]:
            return f"question {q.id} has wrong time limit"
    return ""
