import math
from typing import Optional

POINTS_PER_QUESTION = 10


def grade_mcq(given: Optional[str], correct_answer: str) -> int:
    """
    Exact string match: case-sensitive, no trimming, no partial credit.
    """
    if given is not None and given == correct_answer:
        return POINTS_PER_QUESTION
    return 0


def final_score_percent(total_points: float, question_count: int) -> int:
    """
    round(total / (count * 10) * 100), halves rounded up.
    """
    if question_count <= 0:
        return 0
    percent = total_points / (question_count * POINTS_PER_QUESTION) * 100
    return max(0, min(100, math.floor(percent + 0.5)))
