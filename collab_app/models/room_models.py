from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class RoomView(BaseModel):
    """Snapshot of a room as seen by one participant."""

    model_config = ConfigDict(populate_by_name=True)

    messages: Dict[str, List[str]]  # participant id -> buffer lines
    participants: int
    id: str
    your_id: str = Field(alias="yourId")
    their_id: Optional[str] = Field(default=None, alias="theirId")
    other_participant_ids: List[str] = Field(default_factory=list, alias="otherParticipantIds")
