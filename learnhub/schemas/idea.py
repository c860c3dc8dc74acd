from pydantic import BaseModel, Field
from typing import Optional, Literal, Any
from datetime import datetime

Context = Literal["hackathon", "startup", "presentation", "innovation", "other"]
Tone = Literal["formal", "persuasive", "casual", "professional"]


class IdeaCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    original_input: str = Field(min_length=10, max_length=5000)
    context: Context
    tone: Optional[Tone] = None


class IdeaUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    original_input: Optional[str] = Field(default=None, min_length=10, max_length=5000)
    context: Optional[Context] = None
    tone: Optional[Tone] = None
    tags: Optional[list[str]] = None
    is_public: Optional[bool] = None


class IdeaReprocess(BaseModel):
    tone: Optional[Tone] = None
    context: Optional[Context] = None


class IdeaResponse(BaseModel):
    id: int
    user_id: int
    title: str
    original_input: str
    context: str
    structured_content: dict[str, Any]
    customization: dict[str, Any]
    attachments: list[Any]
    feedback: dict[str, Any]
    outputs: dict[str, Any]
    status: str
    is_public: bool
    tags: list[str]
    views: int
    likes: list[Any]
    ai_processing_time: Optional[int]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class IdeaSummaryResponse(BaseModel):
    id: int
    summary: str
