from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, model_validator

from packages.tiv_core.dto import BaseDTO
from .state import SessionStatus, Difficulty, QuestionType, AnswerOutcome


class Question(BaseDTO):
    """
    One interview question.
    Immutable once issued to a session.
    """
    model_config = ConfigDict(frozen=True, from_attributes=True, populate_by_name=True)

    id: int
    text: str
    difficulty: Difficulty
    type: QuestionType
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None
    time_limit_seconds: int = Field(..., gt=0)

    @model_validator(mode="after")
    def _check_answer_key(self) -> "Question":
        # correct_answer present iff mcq
        if self.type == QuestionType.MCQ:
            if not self.correct_answer or not self.options:
                raise ValueError(f"MCQ question {self.id} needs options and a correct answer")
        elif self.correct_answer is not None:
            raise ValueError(f"Subjective question {self.id} must not carry a correct answer")
        return self


class Answer(BaseDTO):
    question_id: int
    text: str
    submitted_auto: bool = False
    time_taken_seconds: Optional[float] = None
    submitted_at: Optional[datetime] = None


class CandidateProfile(BaseDTO):
    name: str
    email: str
    phone: str


class ScoreDetail(BaseDTO):
    """
    Grading outcome of one question.
    """
    question_id: int
    question: str
    type: QuestionType
    result: AnswerOutcome
    score: float
    rationale: Optional[str] = None
    correct_answer: Optional[str] = None


class ScoreReport(BaseDTO):
    score: int = Field(..., ge=0, le=100)
    total_points: float
    max_points: int
    details: List[ScoreDetail] = Field(default_factory=list)


class SessionContext(BaseDTO):
    """
    Runtime state of one candidate's interview attempt.
    Aggregate root stored in the Session Store, keyed by candidate_id.
    """
    candidate_id: str
    role: Optional[str] = None
    status: SessionStatus = SessionStatus.NOT_STARTED

    questions: List[Question] = Field(default_factory=list)
    answers: List[Answer] = Field(default_factory=list)
    profile: Optional[CandidateProfile] = None

    score: Optional[int] = None
    summary: Optional[str] = None
    score_details: List[ScoreDetail] = Field(default_factory=list)
    total_points: Optional[float] = None

    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def question(self, question_id: int) -> Optional[Question]:
        for q in self.questions:
            if q.id == question_id:
                return q
        return None

    def first_answer(self, question_id: int) -> Optional[Answer]:
        for a in self.answers:
            if a.question_id == question_id:
                return a
        return None
