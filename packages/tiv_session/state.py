from enum import Enum


class SessionStatus(str, Enum):
    """
    Interview Session Status.
    Transitions only move forward: NOT_STARTED -> IN_PROGRESS -> COMPLETED.
    """
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class QuestionType(str, Enum):
    MCQ = "mcq"
    SUBJECTIVE = "subjective"


class AnswerOutcome(str, Enum):
    """
    Per-question grading outcome reported in the score breakdown.
    """
    CORRECT = "correct"
    WRONG = "wrong"
    AI_SCORED = "ai-scored"
    NO_ANSWER = "no-answer"


# Allowed forward transitions
TRANSITIONS = {
    SessionStatus.NOT_STARTED: {SessionStatus.IN_PROGRESS},
    SessionStatus.IN_PROGRESS: {SessionStatus.IN_PROGRESS, SessionStatus.COMPLETED},
    SessionStatus.COMPLETED: set(),
}
