import asyncio
from contextlib import asynccontextmanager
from typing import Dict


class ConcurrencyManager:
    """
    Per-candidate critical sections for state-changing operations (Commands).
    Requests for the same candidate queue up behind each other (a manual submit
    racing an auto-submit is serialised); different candidates never contend.
    """
    def __init__(self):
        self._locks: Dict[str, asyncio.Lock] = {}

    def _lock_for(self, resource_id: str) -> asyncio.Lock:
        # No await between lookup and insert, so this is atomic on the event loop
        lock = self._locks.get(resource_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[resource_id] = lock
        return lock

    @asynccontextmanager
    async def acquire_lock(self, resource_id: str):
        async with self._lock_for(resource_id):
            yield

    def is_locked(self, resource_id: str) -> bool:
        lock = self._locks.get(resource_id)
        return bool(lock and lock.locked())
