import logging
from datetime import datetime, timedelta
from typing import List, Optional

from packages.tiv_core.dto import utc_now
from packages.tiv_core.errors import (
    ConflictError,
    MalformedInputError,
    AnswerDeadlineExceededError,
)
from .state import SessionStatus, TRANSITIONS
from .dto import SessionContext, Question, Answer, CandidateProfile, ScoreDetail
from .policy import SessionPolicy

# Logger setup
logger = logging.getLogger("TIV.session")


class InterviewSessionEngine:
    """
    Core logic for one interview session.
    Owns state transitions and answer acceptance on the loaded context.
    Persistence and oracle calls are the caller's business.
    """
    def __init__(self, context: SessionContext, policy: SessionPolicy):
        self.context = context
        self.policy = policy

    @classmethod
    def new(cls, candidate_id: str, policy: SessionPolicy) -> "InterviewSessionEngine":
        """Bare session with no questions (NOT_STARTED)."""
        return cls(SessionContext(candidate_id=candidate_id), policy)

    @property
    def candidate_id(self) -> str:
        return self.context.candidate_id

    def ensure_can_load_questions(self):
        """
        Raise ConflictError when a question set cannot be issued now.
        """
        status = self.context.status
        if status == SessionStatus.COMPLETED:
            raise ConflictError(
                "Interview already completed; a new candidate id is required to restart",
                details={"candidate_id": self.candidate_id, "status": status.value},
            )
        if status == SessionStatus.IN_PROGRESS and not self.policy.can_regenerate_questions():
            raise ConflictError(
                "Interview already in progress",
                details={"candidate_id": self.candidate_id, "status": status.value},
            )

    def load_questions(self, questions: List[Question], role: str, now: Optional[datetime] = None):
        """
        Issue a question set and move to IN_PROGRESS.
        """
        self.ensure_can_load_questions()
        if not questions:
            raise MalformedInputError("Question set must not be empty")

        if self.context.status == SessionStatus.IN_PROGRESS:
            logger.warning(
                f"Regenerating questions for {self.candidate_id}; "
                f"discarding {len(self.context.answers)} recorded answers"
            )

        self.context.questions = list(questions)
        self.context.answers = []
        self.context.role = role
        self.context.started_at = now or utc_now()
        self._update_status(SessionStatus.IN_PROGRESS)
        logger.info(f"Session {self.candidate_id} started with {len(questions)} questions")

    def accept_answer(
        self,
        question_id: int,
        text: str,
        submitted_auto: bool = False,
        time_taken_seconds: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> bool:
        """
        Record an answer.
        Returns False when the question already has an answer (first one wins).
        """
        status = self.context.status
        if status != SessionStatus.IN_PROGRESS:
            raise ConflictError(
                f"Cannot record answers in status {status.value}",
                details={"candidate_id": self.candidate_id, "status": status.value},
            )

        question = self.context.question(question_id)
        if question is None:
            raise MalformedInputError(
                f"Question {question_id} is not part of this interview",
                details={"candidate_id": self.candidate_id, "question_id": question_id},
            )

        if self.context.first_answer(question_id) is not None:
            logger.info(
                f"Duplicate answer for question {question_id} of {self.candidate_id} ignored "
                f"(auto={submitted_auto})"
            )
            return False

        now = now or utc_now()
        if self.policy.enforces_deadlines() and not submitted_auto:
            self._check_deadline(question, now)

        self.context.answers.append(
            Answer(
                question_id=question_id,
                text=text,
                submitted_auto=submitted_auto,
                time_taken_seconds=time_taken_seconds,
                submitted_at=now,
            )
        )
        logger.info(
            f"Answer recorded for question {question_id} of {self.candidate_id} "
            f"({len(self.context.answers)}/{len(self.context.questions)}, auto={submitted_auto})"
        )
        return True

    def question_deadline(self, question: Question) -> Optional[datetime]:
        """
        Questions are answered in order, so the deadline of question i is
        started_at plus the time limits of questions 1..i.
        """
        if self.context.started_at is None:
            return None
        budget = 0
        for q in self.context.questions:
            budget += q.time_limit_seconds
            if q.id == question.id:
                break
        return self.context.started_at + timedelta(seconds=budget)

    def _check_deadline(self, question: Question, now: datetime):
        deadline = self.question_deadline(question)
        if deadline is None:
            return
        late_by = (now - deadline).total_seconds() - self.policy.deadline_grace_sec
        if late_by > 0:
            logger.warning(f"Late answer for question {question.id} of {self.candidate_id} ({late_by:.1f}s)")
            raise AnswerDeadlineExceededError(question.id, late_by)

    def complete(
        self,
        score: int,
        summary: str,
        details: List[ScoreDetail],
        total_points: float,
        now: Optional[datetime] = None,
    ):
        """
        Transition to COMPLETED with the final score.
        """
        status = self.context.status
        if status != SessionStatus.IN_PROGRESS:
            raise ConflictError(
                "Interview has not started" if status == SessionStatus.NOT_STARTED
                else "Interview already completed",
                details={"candidate_id": self.candidate_id, "status": status.value},
            )
        if not 0 <= score <= 100:
            raise ValueError(f"Score out of range: {score}")

        self.context.score = score
        self.context.summary = summary
        self.context.score_details = list(details)
        self.context.total_points = total_points
        self.context.completed_at = now or utc_now()
        self._update_status(SessionStatus.COMPLETED)
        logger.info(f"Session {self.candidate_id} completed. Score: {score}")

    def set_profile(self, profile: CandidateProfile):
        """Profile is independent of the question flow."""
        self.context.profile = profile

    def _update_status(self, new_status: SessionStatus):
        current = self.context.status
        if new_status not in TRANSITIONS[current]:
            raise ConflictError(
                f"Illegal transition {current.value} -> {new_status.value}",
                details={"candidate_id": self.candidate_id},
            )
        self.context.status = new_status
