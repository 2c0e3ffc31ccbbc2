import asyncio
import json

from .base import IOracleProvider
from .fallback import FALLBACK_QUESTIONS


class MockOracleProvider(IOracleProvider):
    """
    Deterministic oracle for local development and tests.
    Simulates latency and failure scenarios.
    """
    def __init__(self, should_fail: bool = False, latency_ms: int = 0):
        self.should_fail = should_fail
        self.latency_ms = latency_ms
        self.calls: dict[str, int] = {"generate": 0, "score_text": 0, "summarize": 0}

    async def _simulate(self, op: str):
        self.calls[op] += 1
        if self.latency_ms > 0:
            await asyncio.sleep(self.latency_ms / 1000.0)
        if self.should_fail:
            raise RuntimeError(f"Mock Failure: Intentional Error ({op})")

    async def generate(self, role: str) -> str:
        await self._simulate("generate")
        payload = []
        for q in FALLBACK_QUESTIONS:
            item = {
                "id": q.id,
                "text": f"[{role}] {q.text}",
                "difficulty": q.difficulty.value,
                "type": q.type.value,
                "time": q.time_limit_seconds,
            }
            if q.options:
                item["options"] = list(q.options)
                item["answer"] = q.correct_answer
            payload.append(item)
        return json.dumps(payload)

    async def score_text(self, question_text: str, answer_text: str) -> str:
        await self._simulate("score_text")
        # One point per five words, capped at 10
        words = len(answer_text.split())
        score = min(10, words // 5)
        return json.dumps({
            "score": score,
            "rationale": f"Mock grading based on answer length ({words} words).",
        })

    async def summarize(self, transcript: str, final_score: int) -> str:
        await self._simulate("summarize")
        return f"The candidate finished the interview with a score of {final_score}%."
