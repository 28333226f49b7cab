import asyncio
import logging
import time
from typing import Dict, List

from collab_app.models.room_models import RoomView

logger = logging.getLogger(__name__)


class Room:
    """One room's participant buffers, guarded by a single lock.

    ``participants`` keeps join order, so the first other participant seen by
    ``render`` is the earliest one to have joined.
    """

    def __init__(self, room_id: str):
        self.id = room_id
        self.participants: Dict[str, List[str]] = {}
        self.last_active = time.monotonic()
        self._lock = asyncio.Lock()

    async def join(self, participant_id: str) -> None:
        async with self._lock:
            if participant_id not in self.participants:
                self.participants[participant_id] = [""]
                logger.info(
                    "Participant %s joined room %s (total: %d)",
                    participant_id,
                    self.id,
                    len(self.participants),
                )
            self.last_active = time.monotonic()

    async def render(self, participant_id: str) -> RoomView:
        async with self._lock:
            snapshot = {pid: list(lines) for pid, lines in self.participants.items()}
            self.last_active = time.monotonic()

        other_ids = [pid for pid in snapshot if pid != participant_id]
        return RoomView(
            messages=snapshot,
            participants=len(snapshot),
            id=self.id,
            your_id=participant_id,
            their_id=other_ids[0] if other_ids else None,
            other_participant_ids=other_ids,
        )

    def touch(self) -> None:
        self.last_active = time.monotonic()

    def is_idle(self, ttl: float, now: float) -> bool:
        return now - self.last_active > ttl
