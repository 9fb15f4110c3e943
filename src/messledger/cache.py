"""Member list cache.

Call sites depend only on ``MemberCache`` so that a shared invalidation
mechanism can replace the process-local cache in multi-instance deployments.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional

from messledger.domain.entities import Member

logger = logging.getLogger(__name__)


class MemberCache(ABC):
    """Read-through cache for the member list."""

    @abstractmethod
    def get(self, loader: Callable[[], list[Member]]) -> list[Member]:
        """Return the cached list, calling ``loader`` when stale or empty."""
        pass

    @abstractmethod
    def invalidate(self) -> None:
        """Drop the cached list."""
        pass


class TTLMemberCache(MemberCache):
    """Process-local cache whose entry expires after ``ttl`` seconds."""

    def __init__(self, ttl: float = 60.0, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._members: Optional[list[Member]] = None
        self._loaded_at = 0.0

    def get(self, loader: Callable[[], list[Member]]) -> list[Member]:
        with self._lock:
            now = self._clock()
            if self._members is not None and now - self._loaded_at < self.ttl:
                return list(self._members)

            logger.debug("Member cache miss")
            self._members = list(loader())
            self._loaded_at = now
            return list(self._members)

    def invalidate(self) -> None:
        with self._lock:
            self._members = None


class NullMemberCache(MemberCache):
    """Cache that never stores anything."""

    def get(self, loader: Callable[[], list[Member]]) -> list[Member]:
        return list(loader())

    def invalidate(self) -> None:
        pass
