import threading
from typing import Dict, List, Optional

from packages.tiv_session.dto import SessionContext
from packages.tiv_session.repository import SessionStateRepository


class MemorySessionRepository(SessionStateRepository):
    """
    In-Memory implementation of SessionStateRepository.
    State lives for the lifetime of the process only.
    The mapping is guarded by a lock and contexts are copied on the way
    in and out, so a caller mutation never leaks into the store without save_state.
    """
    def __init__(self):
        self._store: Dict[str, SessionContext] = {}
        self._lock = threading.Lock()

    def get_state(self, candidate_id: str) -> Optional[SessionContext]:
        with self._lock:
            ctx = self._store.get(candidate_id)
            return ctx.model_copy(deep=True) if ctx else None

    def save_state(self, candidate_id: str, context: SessionContext) -> None:
        with self._lock:
            self._store[candidate_id] = context.model_copy(deep=True)

    def exists(self, candidate_id: str) -> bool:
        with self._lock:
            return candidate_id in self._store

    def list_states(self) -> List[SessionContext]:
        """
        Iterates through memory store (O(N)).
        """
        with self._lock:
            return [ctx.model_copy(deep=True) for ctx in self._store.values()]
