import copy
from typing import Any

from hotel_booking.application.interfaces.session_store import SessionStore


class InMemorySessionStore(SessionStore):
    def __init__(self) -> None:
        self.snapshots: dict[str, dict[str, Any]] = {}

    async def get(self, context_id: str) -> dict[str, Any] | None:
        snapshot = self.snapshots.get(context_id)
        return copy.deepcopy(snapshot) if snapshot is not None else None

    async def put(self, context_id: str, snapshot: dict[str, Any]) -> None:
        # Stored by value so later mutations of the caller's dict do not leak in
        self.snapshots[context_id] = copy.deepcopy(snapshot)

    async def clear(self, context_id: str) -> None:
        self.snapshots.pop(context_id, None)
