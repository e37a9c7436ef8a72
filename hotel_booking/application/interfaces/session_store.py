"""Interface SessionStore - short-lived storage for booking session snapshots."""

from abc import ABC, abstractmethod
from typing import Any


class SessionStore(ABC):
    """
    Holds at most one session snapshot per user context.

    Snapshots are plain JSON-friendly dicts produced by
    BookingSession.to_snapshot().
    """

    @abstractmethod
    async def get(self, context_id: str) -> dict[str, Any] | None:
        raise NotImplementedError

    @abstractmethod
    async def put(self, context_id: str, snapshot: dict[str, Any]) -> None:
        """Store the snapshot, replacing whatever the context had before."""
        raise NotImplementedError

    @abstractmethod
    async def clear(self, context_id: str) -> None:
        raise NotImplementedError
