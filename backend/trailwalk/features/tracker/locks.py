"""
Per-user serialization.

All mutations and derivations for one user run under that user's lock;
different users never wait on each other. A lock only exists while some
call holds or waits for it.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator


class UserLockRegistry:
    """
    Usage:
        async with registry.lock_for(user_id):
            ...
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}

    @asynccontextmanager
    async def lock_for(self, user_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._holders[user_id] = self._holders.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[user_id] -= 1
            if self._holders[user_id] == 0:
                del self._holders[user_id]
                del self._locks[user_id]

    def __len__(self) -> int:
        return len(self._locks)


# Process-wide registry shared by every TrackerService
user_locks = UserLockRegistry()
