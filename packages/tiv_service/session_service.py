from typing import List, Optional

from packages.tiv_core.errors import NotFoundError, MalformedInputError, ConflictError
from packages.tiv_core.logging import get_logger
from packages.tiv_service.concurrency import ConcurrencyManager
from packages.tiv_service.mapper import SessionMapper
from packages.tiv_dto.session import QuestionDTO, AnswerReceiptDTO, ScoreResultDTO
from packages.tiv_eval.engine import ScoringEngine
from packages.tiv_oracle.client import OracleClient
from packages.tiv_session.dto import CandidateProfile, SessionContext
from packages.tiv_session.engine import InterviewSessionEngine
from packages.tiv_session.policy import SessionPolicy
from packages.tiv_session.repository import SessionStateRepository
from packages.tiv_session.state import SessionStatus

logger = get_logger("TIV.service.session")


class SessionService:
    """
    Application Service for interview sessions.
    Responsible for:
    1. Transaction boundaries (loading / saving the session)
    2. Concurrency control (per-candidate lock)
    3. Orchestrating engine and oracle calls

    The engine works on a copy of the stored context which is saved only
    after the whole operation succeeded, so a failure leaves no partial state.
    """
    def __init__(
        self,
        state_repo: SessionStateRepository,
        oracle: OracleClient,
        policy: SessionPolicy,
        concurrency_manager: Optional[ConcurrencyManager] = None,
        default_role: str = "fullstack developer",
    ):
        self.state_repo = state_repo
        self.oracle = oracle
        self.policy = policy
        self.concurrency_manager = concurrency_manager or ConcurrencyManager()
        self.scoring_engine = ScoringEngine(oracle)
        self.default_role = default_role

    async def start_session(self, candidate_id: str, role: Optional[str] = None) -> List[QuestionDTO]:
        """
        Issue a question set, creating the session when needed.
        """
        candidate_id = self._require_candidate_id(candidate_id)
        role = (role or "").strip() or self.default_role

        async with self.concurrency_manager.acquire_lock(candidate_id):
            context = self.state_repo.get_state(candidate_id)
            engine = (
                InterviewSessionEngine(context, self.policy)
                if context
                else InterviewSessionEngine.new(candidate_id, self.policy)
            )
            # Refuse before spending an oracle call
            engine.ensure_can_load_questions()

            questions = await self.oracle.generate_question_set(role)
            engine.load_questions(questions, role)
            self.state_repo.save_state(candidate_id, engine.context)

        logger.info(f"Questions issued to {candidate_id} for role '{role}'")
        return SessionMapper.to_question_dtos(questions)

    async def record_answer(
        self,
        candidate_id: str,
        question_id: int,
        answer: str,
        submitted_auto: bool = False,
        time_taken_seconds: Optional[float] = None,
    ) -> AnswerReceiptDTO:
        """
        Handles answer submission with Concurrency Control.
        """
        # Existence check first so an unknown candidate leaves no trace at all
        if not self.state_repo.exists(candidate_id):
            raise NotFoundError(candidate_id)

        async with self.concurrency_manager.acquire_lock(candidate_id):
            engine = InterviewSessionEngine(self._load(candidate_id), self.policy)
            accepted = engine.accept_answer(
                question_id,
                answer,
                submitted_auto=submitted_auto,
                time_taken_seconds=time_taken_seconds,
            )
            if accepted:
                self.state_repo.save_state(candidate_id, engine.context)

        return AnswerReceiptDTO(accepted=accepted)

    async def score_session(self, candidate_id: str) -> ScoreResultDTO:
        """
        Grade every question, summarise and complete the session.
        A completed session returns its stored result without re-grading.
        """
        if not self.state_repo.exists(candidate_id):
            raise NotFoundError(candidate_id)

        async with self.concurrency_manager.acquire_lock(candidate_id):
            context = self._load(candidate_id)

            if context.status == SessionStatus.COMPLETED:
                logger.info(f"Session {candidate_id} already scored; returning stored result")
                return SessionMapper.to_score_dto(context)
            if context.status == SessionStatus.NOT_STARTED:
                raise ConflictError(
                    "Interview has not started",
                    details={"candidate_id": candidate_id},
                )

            report = await self.scoring_engine.score(context.questions, context.answers)
            summary = await self.oracle.summarize(context.questions, context.answers, report.score)

            engine = InterviewSessionEngine(context, self.policy)
            engine.complete(report.score, summary, report.details, report.total_points)
            self.state_repo.save_state(candidate_id, engine.context)

        return SessionMapper.to_score_dto(engine.context)

    async def set_profile(self, candidate_id: str, profile: CandidateProfile) -> None:
        """
        Attach profile data, creating a bare NOT_STARTED session when needed.
        """
        candidate_id = self._require_candidate_id(candidate_id)

        async with self.concurrency_manager.acquire_lock(candidate_id):
            context = self.state_repo.get_state(candidate_id)
            engine = (
                InterviewSessionEngine(context, self.policy)
                if context
                else InterviewSessionEngine.new(candidate_id, self.policy)
            )
            engine.set_profile(profile)
            self.state_repo.save_state(candidate_id, engine.context)

        logger.info(f"Profile saved for {candidate_id}")

    def _load(self, candidate_id: str) -> SessionContext:
        context = self.state_repo.get_state(candidate_id)
        if context is None:
            raise NotFoundError(candidate_id)
        return context

    @staticmethod
    def _require_candidate_id(candidate_id: Optional[str]) -> str:
        if not candidate_id or not candidate_id.strip():
            raise MalformedInputError("Missing candidateId")
        return candidate_id
