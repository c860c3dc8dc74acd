from pydantic import BaseModel, Field, HttpUrl
from typing import Optional, Literal, Any
from datetime import datetime

Mode = Literal["ai-interviewer", "scenario-based", "custom"]


class InterviewConfiguration(BaseModel):
    role: str = Field(min_length=1, max_length=100)
    company: Optional[str] = Field(default=None, max_length=100)
    experience_level: Literal["entry", "mid", "senior", "executive"] = "mid"
    duration: int = Field(default=30, ge=5, le=120)  # minutes
    question_types: list[str] = Field(default_factory=lambda: ["behavioral", "technical"])
    difficulty: Literal["easy", "medium", "hard"] = "medium"


class InterviewCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    mode: Mode
    configuration: InterviewConfiguration
    tags: list[str] = Field(default_factory=list)
    is_public: bool = False


class InterviewUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    configuration: Optional[InterviewConfiguration] = None
    tags: Optional[list[str]] = None
    is_public: Optional[bool] = None


class ResponseSubmit(BaseModel):
    question_id: str = Field(min_length=1)
    answer_text: Optional[str] = Field(default=None, min_length=1, max_length=5000)
    response_time: Optional[int] = Field(default=None, ge=0)  # seconds
    audio_url: Optional[HttpUrl] = None


class InterviewResponseEntry(BaseModel):
    question_id: str
    answer_text: Optional[str]
    response_time: Optional[int]
    audio_url: Optional[str]
    submitted_at: datetime


class InterviewResponse(BaseModel):
    id: int
    user_id: int
    title: str
    mode: str
    configuration: dict[str, Any]
    questions: list[Any]
    responses: list[Any]
    score: Optional[float]
    feedback: dict[str, Any]
    status: str
    started_at: Optional[datetime]
    completed_at: Optional[datetime]
    duration: Optional[int]
    tags: list[str]
    is_public: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InterviewOwner(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class PublicInterviewResponse(BaseModel):
    id: int
    title: str
    mode: str
    configuration: dict[str, Any]
    tags: list[str]
    score: Optional[float]
    created_at: datetime
    user: InterviewOwner

    class Config:
        from_attributes = True


class InterviewFeedbackResponse(BaseModel):
    id: int
    feedback: dict[str, Any]
    score: Optional[float]
    completed_at: Optional[datetime]
