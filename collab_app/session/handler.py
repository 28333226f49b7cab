"""Per-connection session state machine.

A connection starts in ``CONNECTED`` and moves to ``IN_ROOM`` on its first
successful ``newroom`` or ``fetchRoom``, then stays bound to that room; later
room requests are ignored. Messages are handled one at a time in arrival
order, and anything that fails to decode is dropped without a reply.
"""

import enum
import logging
from typing import Optional

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from collab_app import config
from collab_app.models.message_models import (
    FetchRoom,
    GotRoom,
    KeyPress,
    NewRoom,
    RoomCreated,
    decode_client_message,
    encode_server_message,
)
from collab_app.rooms.identity import generate_id
from collab_app.rooms.registry import RoomIdExhaustedError, RoomRegistry
from collab_app.rooms.room import Room

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    CONNECTED = "connected"
    IN_ROOM = "in_room"


class SessionHandler:
    def __init__(
        self,
        registry: RoomRegistry,
        *,
        room_id_length: int = config.ROOM_ID_LENGTH,
        participant_id_length: int = config.PARTICIPANT_ID_LENGTH,
        room_id_attempts: int = config.ROOM_ID_ATTEMPTS,
    ):
        self.registry = registry
        self.room_id_length = room_id_length
        self.participant_id_length = participant_id_length
        self.room_id_attempts = room_id_attempts
        self.state = SessionState.CONNECTED
        self.room: Optional[Room] = None
        self.participant_id: Optional[str] = None

    async def run(self, websocket: WebSocket) -> None:
        """Receive loop; returns once the client disconnects."""
        while True:
            event = await websocket.receive()
            if event["type"] == "websocket.disconnect":
                return
            text = event.get("text")
            if text is None:
                logger.debug("Ignoring non-text frame")
                continue
            try:
                response = await self.handle_text(text)
            except RoomIdExhaustedError:
                logger.exception("Could not allocate a room id")
                continue
            if response is not None:
                await self._send(websocket, response)

    async def handle_text(self, raw: str) -> Optional[dict]:
        """Apply one client frame and return the reply payload, if any."""
        try:
            message = decode_client_message(raw)
        except ValidationError as exc:
            logger.debug("Dropping undecodable message (%d error(s))", exc.error_count())
            return None

        if isinstance(message, KeyPress):
            self._handle_key_press(message)
            return None
        if self.state is SessionState.IN_ROOM:
            logger.debug(
                "Dropping %s: participant %s is already bound to room %s",
                message.type,
                self.participant_id,
                self.room.id,
            )
            return None
        if isinstance(message, NewRoom):
            return await self._handle_new_room(message)
        return await self._handle_fetch_room(message)

    async def _handle_new_room(self, message: NewRoom) -> dict:
        participant_id = self._resolve_participant_id(message.participant_id)
        room = await self._register_new_room(participant_id)
        self._bind(room, participant_id)
        view = await room.render(participant_id)
        return encode_server_message(RoomCreated(room=view))

    async def _handle_fetch_room(self, message: FetchRoom) -> dict:
        participant_id = self._resolve_participant_id(message.participant_id)
        room = await self.registry.get_or_create_room(message.room_id)
        await room.join(participant_id)
        self._bind(room, participant_id)
        view = await room.render(participant_id)
        return encode_server_message(GotRoom(room=view))

    def _handle_key_press(self, message: KeyPress) -> None:
        # Edits are not applied to buffers yet; typing still counts as activity.
        if self.room is not None:
            self.room.touch()
        logger.debug(
            "keyPress from %s in room %s ignored (key=%r, cursorPos=%s)",
            self.participant_id,
            self.room.id if self.room else None,
            message.key,
            message.cursor_pos,
        )

    async def _register_new_room(self, participant_id: str) -> Room:
        # The id is generated before the registry lock is taken; a taken id is
        # re-rolled rather than overwriting the existing room.
        for _ in range(self.room_id_attempts):
            room_id = generate_id(self.room_id_length)
            room = Room(room_id)
            await room.join(participant_id)
            if await self.registry.create_room(room_id, room):
                return room
            logger.warning("Room id collision on %s, retrying", room_id)
        raise RoomIdExhaustedError(f"no free room id after {self.room_id_attempts} attempts")

    def _resolve_participant_id(self, participant_id: Optional[str]) -> str:
        if participant_id is not None:
            return participant_id
        return generate_id(self.participant_id_length)

    def _bind(self, room: Room, participant_id: str) -> None:
        self.room = room
        self.participant_id = participant_id
        self.state = SessionState.IN_ROOM

    async def _send(self, websocket: WebSocket, payload: dict) -> None:
        try:
            await websocket.send_json(payload)
        except (WebSocketDisconnect, RuntimeError) as exc:
            logger.warning("Send to participant %s failed: %r", self.participant_id, exc)
