from packages.tiv_session.dto import Question
from packages.tiv_session.state import Difficulty, QuestionType
from .schema import SubjectiveScore

# Time limit per difficulty (seconds)
TIME_LIMITS = {
    Difficulty.EASY: 20,
    Difficulty.MEDIUM: 60,
    Difficulty.HARD: 120,
}

DEFAULT_SUBJECTIVE_SCORE = SubjectiveScore(score=5, rationale="Default fallback score.")

FALLBACK_SUMMARY = "Summary generation failed. Candidate completed the interview."

FALLBACK_QUESTIONS = (
    Question(
        id=1,
        text="What is JSX in React?",
        difficulty=Difficulty.EASY,
        type=QuestionType.MCQ,
        options=["Template engine", "JS syntax extension", "CSS preprocessor"],
        correct_answer="JS syntax extension",
        time_limit_seconds=TIME_LIMITS[Difficulty.EASY],
    ),
    Question(
        id=2,
        text="Which hook is used for state management?",
        difficulty=Difficulty.EASY,
        type=QuestionType.MCQ,
        options=["useEffect", "useState", "useRef"],
        correct_answer="useState",
        time_limit_seconds=TIME_LIMITS[Difficulty.EASY],
    ),
    Question(
        id=3,
        text="Which hook replaces lifecycle methods like componentDidMount?",
        difficulty=Difficulty.MEDIUM,
        type=QuestionType.MCQ,
        options=["useContext", "useEffect", "useMemo"],
        correct_answer="useEffect",
        time_limit_seconds=TIME_LIMITS[Difficulty.MEDIUM],
    ),
    Question(
        id=4,
        text="Which HTTP method is idempotent?",
        difficulty=Difficulty.MEDIUM,
        type=QuestionType.MCQ,
        options=["POST", "GET", "PATCH"],
        correct_answer="GET",
        time_limit_seconds=TIME_LIMITS[Difficulty.MEDIUM],
    ),
    Question(
        id=5,
        text="Explain JWT authentication flow in a React app.",
        difficulty=Difficulty.HARD,
        type=QuestionType.SUBJECTIVE,
        time_limit_seconds=TIME_LIMITS[Difficulty.HARD],
    ),
    Question(
        id=6,
        text="What is the Event Loop in Node.js?",
        difficulty=Difficulty.HARD,
        type=QuestionType.MCQ,
        options=["Database system", "Concurrency model", "Compiler feature"],
        correct_answer="Concurrency model",
        time_limit_seconds=TIME_LIMITS[Difficulty.HARD],
    ),
)


def fallback_question_set() -> list[Question]:
    return list(FALLBACK_QUESTIONS)
