import asyncio
import logging
import time
from typing import Dict, List, Optional

from collab_app.rooms.room import Room

logger = logging.getLogger(__name__)


class RoomIdExhaustedError(Exception):
    """No unused room id could be generated."""


class RoomRegistry:
    """Process-wide table of rooms keyed by room id.

    The registry lock covers only lookups and inserts on the table; callers
    work with a Room after the lock has been released.
    """

    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._rooms)

    async def create_room(self, room_id: str, room: Room) -> bool:
        """Register ``room`` under ``room_id``; False if the id is taken."""
        async with self._lock:
            if room_id in self._rooms:
                return False
            self._rooms[room_id] = room
        logger.info("Room created: %s", room_id)
        return True

    async def get_or_create_room(self, room_id: str) -> Room:
        async with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                room = Room(room_id)
                self._rooms[room_id] = room
                logger.info("Room created on fetch: %s", room_id)
        return room

    async def get(self, room_id: str) -> Optional[Room]:
        async with self._lock:
            return self._rooms.get(room_id)

    async def evict_idle(self, ttl: float) -> List[str]:
        """Drop rooms with no join or render in the last ``ttl`` seconds."""
        now = time.monotonic()
        async with self._lock:
            stale = [room_id for room_id, room in self._rooms.items() if room.is_idle(ttl, now)]
            for room_id in stale:
                del self._rooms[room_id]
        return stale
