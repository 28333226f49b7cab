from pydantic import BaseModel, Field, TypeAdapter
from typing import Annotated, Literal, Optional, Union

from collab_app.models.room_models import RoomView


# --- Client -> server (wire names only) ---
class NewRoom(BaseModel):
    type: Literal["newroom"]
    participant_id: Optional[str] = Field(default=None, alias="socketId")


class FetchRoom(BaseModel):
    type: Literal["fetchRoom"]
    room_id: str = Field(alias="id")
    participant_id: Optional[str] = Field(default=None, alias="socketId")


class KeyPress(BaseModel):
    type: Literal["keyPress"]
    key: str
    cursor_pos: Optional[int] = Field(default=None, alias="cursorPos", ge=0)


ClientMessage = Annotated[Union[NewRoom, FetchRoom, KeyPress], Field(discriminator="type")]

client_message_adapter = TypeAdapter(ClientMessage)


def decode_client_message(raw: str) -> ClientMessage:
    """Parse one text frame.

    Raises pydantic.ValidationError for bad JSON, a missing or unknown
    ``type`` and wrong field types.
    """
    return client_message_adapter.validate_json(raw)


# --- Server -> client ---
class RoomCreated(BaseModel):
    type: Literal["roomCreated"] = "roomCreated"
    room: RoomView


class GotRoom(BaseModel):
    type: Literal["gotRoom"] = "gotRoom"
    room: RoomView


def encode_server_message(message: Union[RoomCreated, GotRoom]) -> dict:
    return message.model_dump(by_alias=True)
