from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Literal, Any
from datetime import datetime

Role = Literal["student", "instructor", "admin"]


class UserCreate(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Role = "student"


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    profile: dict[str, Any]
    preferences: dict[str, Any]
    stats: dict[str, Any]
    is_active: bool
    last_login: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AccountUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None


class PasswordUpdateRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class UserProfile(BaseModel):
    bio: Optional[str] = Field(default=None, max_length=500)
    skills: Optional[list[str]] = None
    interests: Optional[list[str]] = None
    career_goals: Optional[list[str]] = None
    experience_level: Optional[Literal["beginner", "intermediate", "advanced"]] = None

    model_config = {"extra": "allow"}


class UserPreferences(BaseModel):
    notification_email: Optional[bool] = None
    theme: Optional[Literal["light", "dark"]] = None
    language: Optional[str] = Field(default=None, min_length=2, max_length=5)

    model_config = {"extra": "allow"}


class ProfileUpdateRequest(BaseModel):
    profile: Optional[UserProfile] = None
    preferences: Optional[UserPreferences] = None


class UserStats(BaseModel):
    ideas_refined: int = 0
    interviews_completed: int = 0
    total_practice_time: int = 0
    average_score: float = 0


class StatsUpdateRequest(BaseModel):
    ideas_refined: Optional[int] = Field(default=None, ge=0)
    interviews_completed: Optional[int] = Field(default=None, ge=0)
    total_practice_time: Optional[int] = Field(default=None, ge=0)
    average_score: Optional[float] = Field(default=None, ge=0)


class AdminUserUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    role: Optional[Role] = None
    is_active: Optional[bool] = None
    profile: Optional[UserProfile] = None
    preferences: Optional[UserPreferences] = None
