from typing import List

from fastapi import APIRouter, Depends

from TIV.api.dependencies import get_admin_query_service
from packages.tiv_dto.session import CandidateSummaryDTO, CandidateDetailDTO
from packages.tiv_service.admin_query import AdminQueryService

router = APIRouter(prefix="/candidates", tags=["Dashboard"])


@router.get("", response_model=List[CandidateSummaryDTO])
def list_candidates(
    service: AdminQueryService = Depends(get_admin_query_service)
):
    """
    List every candidate, sorted by score descending.
    """
    return service.list_candidates()


@router.get("/{candidate_id}", response_model=CandidateDetailDTO)
def get_candidate(
    candidate_id: str,
    service: AdminQueryService = Depends(get_admin_query_service)
):
    """
    Get the full session record (Read-Only).
    """
    return service.get_candidate(candidate_id)
