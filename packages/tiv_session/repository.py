from abc import ABC, abstractmethod
from typing import List, Optional

from .dto import SessionContext


class SessionStateRepository(ABC):
    """
    Interface for session state storage.
    Single authority for session existence; one session per candidate_id.
    """
    @abstractmethod
    def get_state(self, candidate_id: str) -> Optional[SessionContext]:
        pass

    @abstractmethod
    def save_state(self, candidate_id: str, context: SessionContext) -> None:
        """Upsert. Creates the entry on first write, last writer wins."""
        pass

    @abstractmethod
    def exists(self, candidate_id: str) -> bool:
        pass

    @abstractmethod
    def list_states(self) -> List[SessionContext]:
        """
        Snapshot of every known session.
        Essential for the reviewer dashboard.
        """
        pass
