from learnhub.schemas.user import (
    UserCreate,
    UserResponse,
    TokenResponse,
    RefreshTokenRequest,
)
from learnhub.schemas.idea import IdeaCreate, IdeaUpdate, IdeaResponse
from learnhub.schemas.interview import InterviewCreate, InterviewUpdate, InterviewResponse
from learnhub.schemas.common import Page

__all__ = [
    "UserCreate",
    "UserResponse",
    "TokenResponse",
    "RefreshTokenRequest",
    "IdeaCreate",
    "IdeaUpdate",
    "IdeaResponse",
    "InterviewCreate",
    "InterviewUpdate",
    "InterviewResponse",
    "Page",
]
