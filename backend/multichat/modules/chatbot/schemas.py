from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field

from multichat.core.schemas import CamelModel


class ChatRequest(CamelModel):
    message: str = Field(min_length=1)
    model_ids: list[str] = Field(min_length=1)
    conversation_id: Optional[int] = None
    enable_web_search: bool = False


class SearchResultSchema(CamelModel):
    title: str
    url: str
    snippet: str


class ModelOutcome(CamelModel):
    model_id: str
    content: str
    response_time: int
    error: Optional[str] = None
    search_results: Optional[list[SearchResultSchema]] = None


class ChatEnvelope(CamelModel):
    conversation_id: int
    responses: list[ModelOutcome]


# ── Conversation schemas ──

class MessageSchema(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    conversation_id: int
    role: str
    content: str
    model_id: Optional[str] = None
    provider: Optional[str] = None
    response_time: Optional[int] = None
    created_at: datetime


class ConversationSummary(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    # Stored as epoch seconds, sent as ISO 8601 UTC.
    created_at: datetime
    updated_at: datetime


class ConversationDetail(ConversationSummary):
    messages: list[MessageSchema] = Field(default_factory=list)


class UpdateConversationRequest(CamelModel):
    title: str = Field(min_length=1)


class DeleteConversationResponse(CamelModel):
    success: bool
