import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from collab_app.rooms.registry import RoomRegistry
from collab_app.session.handler import SessionHandler

router = APIRouter()
logger = logging.getLogger(__name__)


def get_registry(websocket: WebSocket) -> RoomRegistry:
    return websocket.app.state.registry


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket, registry: RoomRegistry = Depends(get_registry)):
    client = websocket.client
    await websocket.accept()
    logger.info("WebSocket connection accepted from %s", client)

    handler = SessionHandler(registry)
    try:
        await handler.run(websocket)
    except WebSocketDisconnect:
        pass
    except Exception:
        logger.exception("Unexpected error in WebSocket handler for %s", client)
    finally:
        logger.info(
            "WebSocket connection from %s closed (participant=%s, room=%s)",
            client,
            handler.participant_id,
            handler.room.id if handler.room else None,
        )
