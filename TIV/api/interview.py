from fastapi import APIRouter, Depends

from TIV.api.schemas import (
    GenerateQuestionsRequest,
    GenerateQuestionsResponse,
    SaveAnswerRequest,
    ScoreRequest,
    CompleteProfileRequest,
    OkResponse,
)
from TIV.api.dependencies import get_session_service
from packages.tiv_core.logging import get_logger
from packages.tiv_dto.session import AnswerReceiptDTO, ScoreResultDTO
from packages.tiv_service.session_service import SessionService
from packages.tiv_session.dto import CandidateProfile

router = APIRouter(tags=["Interview"])
logger = get_logger("TIV.api.interview")


@router.post("/generate-questions", response_model=GenerateQuestionsResponse)
async def generate_questions(
    request: GenerateQuestionsRequest,
    service: SessionService = Depends(get_session_service)
):
    """
    Start the interview: issue the 6-question set for the candidate.
    """
    logger.info(f"Generating questions for candidate={request.candidate_id}, role={request.role}")
    questions = await service.start_session(request.candidate_id, request.role)
    return GenerateQuestionsResponse(questions=questions)


@router.post("/save-answer", response_model=AnswerReceiptDTO)
async def save_answer(
    request: SaveAnswerRequest,
    service: SessionService = Depends(get_session_service)
):
    """
    Record one answer. A repeated answer for the same question is not stored (accepted=false).
    """
    return await service.record_answer(
        request.candidate_id,
        request.question_id,
        request.answer,
        submitted_auto=request.auto_submitted,
        time_taken_seconds=request.time_taken,
    )


@router.post("/score", response_model=ScoreResultDTO)
async def score(
    request: ScoreRequest,
    service: SessionService = Depends(get_session_service)
):
    """
    Grade the interview and return the per-question breakdown, score and summary.
    """
    return await service.score_session(request.candidate_id)


@router.post("/complete-profile", response_model=OkResponse)
async def complete_profile(
    request: CompleteProfileRequest,
    service: SessionService = Depends(get_session_service)
):
    profile = CandidateProfile(**request.profile.model_dump())
    await service.set_profile(request.candidate_id, profile)
    return OkResponse()
