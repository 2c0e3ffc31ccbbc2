from datetime import datetime
from typing import List, Optional

from pydantic import Field

from packages.tiv_core.dto import CamelDTO


class QuestionDTO(CamelDTO):
    """
    Question as delivered to the candidate client.
    The answer key is deliberately absent.
    """
    id: int
    text: str
    difficulty: str
    type: str
    options: Optional[List[str]] = None
    time: int


class AnswerReceiptDTO(CamelDTO):
    ok: bool = True
    accepted: bool


class ScoreDetailDTO(CamelDTO):
    question_id: int
    q: str
    result: str
    score: float
    rationale: Optional[str] = None
    correct_answer: Optional[str] = None


class ScoreResultDTO(CamelDTO):
    score: int
    details: List[ScoreDetailDTO]
    summary: str


class CandidateSummaryDTO(CamelDTO):
    """
    Row of the reviewer dashboard.
    """
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    score: int = 0
    summary: str = ""
    status: str
    completed_at: Optional[datetime] = None


class AnswerRecordDTO(CamelDTO):
    question_id: int
    answer: str
    auto_submitted: bool
    time_taken: Optional[float] = None
    submitted_at: Optional[datetime] = None


class QuestionRecordDTO(CamelDTO):
    """
    Question as shown to reviewers, answer key included.
    """
    id: int
    text: str
    difficulty: str
    type: str
    options: Optional[List[str]] = None
    answer: Optional[str] = None
    time: int


class ProfileDTO(CamelDTO):
    name: str
    email: str
    phone: str


class CandidateDetailDTO(CamelDTO):
    """
    Full session record for the reviewer dashboard.
    """
    id: str
    role: Optional[str] = None
    status: str
    profile: Optional[ProfileDTO] = None
    questions: List[QuestionRecordDTO] = Field(default_factory=list)
    answers: List[AnswerRecordDTO] = Field(default_factory=list)
    score: Optional[int] = None
    total_points: Optional[float] = None
    max_points: Optional[int] = None
    summary: Optional[str] = None
    details: List[ScoreDetailDTO] = Field(default_factory=list)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
