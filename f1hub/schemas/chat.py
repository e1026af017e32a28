from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ChatTurn(BaseModel):
    role: Literal["user", "assistant", "model"]   # "model" is what the web client sends
    text: str = Field(..., min_length=1)

    @field_validator("text")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("text must not be blank")
        return v


class UserContext(CamelModel):
    facts: List[str] = []
    favourite_driver: Optional[str] = Field(None, alias="favouriteDriver")


class ChatRequest(CamelModel):
    messages: List[ChatTurn] = Field(..., min_length=1)
    user_context: UserContext = Field(default_factory=UserContext, alias="userContext")

    @field_validator("messages")
    @classmethod
    def starts_and_ends_with_user(cls, v: List[ChatTurn]) -> List[ChatTurn]:
        if v[0].role != "user":
            raise ValueError("the first message must come from the user")
        if v[-1].role != "user":
            raise ValueError("the last message must come from the user")
        return v


class Source(BaseModel):
    uri: str
    title: Optional[str] = None


class ChatResponse(CamelModel):
    reply: str
    sources: List[Source] = []
    new_facts: List[str] = Field(default_factory=list, alias="newFacts")
