import asyncio
import logging

from collab_app.rooms.registry import RoomRegistry

logger = logging.getLogger(__name__)


async def room_sweeper_loop(registry: RoomRegistry, ttl: float, interval: float):
    while True:
        await asyncio.sleep(interval)
        try:
            evicted = await registry.evict_idle(ttl)
        except Exception:
            logger.exception("Idle room sweep failed")
            continue
        if evicted:
            logger.info("Evicted %d idle room(s): %s", len(evicted), ", ".join(evicted))
