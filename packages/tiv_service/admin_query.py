from typing import List

from packages.tiv_core.errors import NotFoundError
from packages.tiv_session.repository import SessionStateRepository
from packages.tiv_service.mapper import SessionMapper
from packages.tiv_dto.session import CandidateSummaryDTO, CandidateDetailDTO


class AdminQueryService:
    """
    Read-Only Service for the reviewer dashboard.
    Bypasses Domain Logic and Concurrency Control.
    Directly accesses Repository for reading state snapshots.
    """
    def __init__(self, repository: SessionStateRepository):
        self.repository = repository

    def list_candidates(self) -> List[CandidateSummaryDTO]:
        """
        Every known session, best score first.
        Sessions without a score sort as 0.
        """
        rows = [SessionMapper.to_summary_dto(ctx) for ctx in self.repository.list_states()]
        return sorted(rows, key=lambda row: row.score, reverse=True)

    def get_candidate(self, candidate_id: str) -> CandidateDetailDTO:
        """
        Retrieves the full session record.
        """
        context = self.repository.get_state(candidate_id)
        if not context:
            raise NotFoundError(candidate_id)
        return SessionMapper.to_detail_dto(context)
