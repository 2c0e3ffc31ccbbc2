from typing import List

from packages.tiv_eval.rules import POINTS_PER_QUESTION
from packages.tiv_session.dto import SessionContext, Question, ScoreDetail
from packages.tiv_dto.session import (
    QuestionDTO,
    QuestionRecordDTO,
    AnswerRecordDTO,
    ScoreDetailDTO,
    ScoreResultDTO,
    CandidateSummaryDTO,
    CandidateDetailDTO,
    ProfileDTO,
)


class SessionMapper:
    """
    Explicit Mapper to convert domain objects (SessionContext, Question) to DTOs.
    Ensures no domain objects leak into the API layer.
    """

    @staticmethod
    def to_question_dtos(questions: List[Question]) -> List[QuestionDTO]:
        return [
            QuestionDTO(
                id=q.id,
                text=q.text,
                difficulty=q.difficulty.value,
                type=q.type.value,
                options=list(q.options) if q.options else None,
                time=q.time_limit_seconds,
            )
            for q in questions
        ]

    @staticmethod
    def to_detail_dtos(details: List[ScoreDetail]) -> List[ScoreDetailDTO]:
        return [
            ScoreDetailDTO(
                question_id=d.question_id,
                q=d.question,
                result=d.result.value,
                score=d.score,
                rationale=d.rationale,
                correct_answer=d.correct_answer,
            )
            for d in details
        ]

    @staticmethod
    def to_score_dto(context: SessionContext) -> ScoreResultDTO:
        return ScoreResultDTO(
            score=context.score or 0,
            details=SessionMapper.to_detail_dtos(context.score_details),
            summary=context.summary or "",
        )

    @staticmethod
    def to_summary_dto(context: SessionContext) -> CandidateSummaryDTO:
        profile = context.profile
        return CandidateSummaryDTO(
            id=context.candidate_id,
            name=profile.name if profile else None,
            email=profile.email if profile else None,
            phone=profile.phone if profile else None,
            score=context.score or 0,
            summary=context.summary or "",
            status=context.status.value,
            completed_at=context.completed_at,
        )

    @staticmethod
    def to_detail_dto(context: SessionContext) -> CandidateDetailDTO:
        return CandidateDetailDTO(
            id=context.candidate_id,
            role=context.role,
            status=context.status.value,
            profile=ProfileDTO(**context.profile.model_dump()) if context.profile else None,
            questions=[
                QuestionRecordDTO(
                    id=q.id,
                    text=q.text,
                    difficulty=q.difficulty.value,
                    type=q.type.value,
                    options=list(q.options) if q.options else None,
                    answer=q.correct_answer,
                    time=q.time_limit_seconds,
                )
                for q in context.questions
            ],
            answers=[
                AnswerRecordDTO(
                    question_id=a.question_id,
                    answer=a.text,
                    auto_submitted=a.submitted_auto,
                    time_taken=a.time_taken_seconds,
                    submitted_at=a.submitted_at,
                )
                for a in context.answers
            ],
            score=context.score,
            total_points=context.total_points,
            max_points=(
                len(context.questions) * POINTS_PER_QUESTION
                if context.total_points is not None
                else None
            ),
            summary=context.summary,
            details=SessionMapper.to_detail_dtos(context.score_details),
            started_at=context.started_at,
            completed_at=context.completed_at,
        )
