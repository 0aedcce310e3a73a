"""Request/response Pydantic models."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class Card(BaseModel):
    front: str
    back: str


class FlashcardRequest(BaseModel):
    url: str
    mode: Literal["sync", "stream"] = "sync"
    deck: str | None = None
    tags: list[str] = []
    insert: bool = False


class NoteCard(Card):
    # None means "use the request-level tags"
    tags: list[str] | None = None


class NoteRequest(BaseModel):
    deck: str
    cards: list[NoteCard] = Field(min_length=1)
    tags: list[str] = []


class NoteResponse(BaseModel):
    deck: str
    added: list[Card] = []
    failed: list[Card] = []


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class FlashcardMetadata(BaseModel):
    requests: int = 0
    model: str = ""
    prompt_version: str = ""
    fragment_count: int = 0


class FlashcardResult(BaseModel):
    task_id: str
    status: str = "completed"
    url: str
    cards: list[Card] = []
    deck: str | None = None
    tags: list[str] = []
    added: list[Card] = []
    usage: Usage = Usage()
    metadata: FlashcardMetadata = FlashcardMetadata()
    created_at: datetime
