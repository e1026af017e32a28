from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_COMMENT_LENGTH = 500


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CommentIn(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def length(cls, v: str) -> str:
        v = v.strip()
        if not 1 <= len(v) <= MAX_COMMENT_LENGTH:
            raise ValueError(f"comment must be 1-{MAX_COMMENT_LENGTH} characters")
        return v


class Comment(BaseModel):
    id: int
    race_id: str
    user_id: str
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    text: str
    created_at: datetime


class PredictionIn(CamelModel):
    predicted_winner: str = Field(..., alias="predictedWinner", min_length=1, max_length=100)


class Prediction(BaseModel):
    id: int
    user_id: str
    display_name: Optional[str] = None
    race_id: str
    race_name: str
    predicted_winner: str
    created_at: datetime


class Profile(BaseModel):
    id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: datetime
    favourite_driver_id: Optional[str] = None


class ProfileUpdate(CamelModel):
    favourite_driver: Optional[str] = Field(None, alias="favouriteDriver")


class MemoryMessage(BaseModel):
    role: Literal["user", "assistant", "model"]
    text: str
    ts: int   # epoch millis, as sent by the client


class ChatMemory(CamelModel):
    facts: List[str] = []
    recent_messages: List[MemoryMessage] = Field(default_factory=list, alias="recentMessages")
