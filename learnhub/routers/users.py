from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from learnhub.database import get_db
from learnhub.models.user import User
from learnhub.schemas.common import Page
from learnhub.schemas.user import (
    AdminUserUpdateRequest,
    ProfileUpdateRequest,
    Role,
    StatsUpdateRequest,
    UserResponse,
    UserStats,
)
from learnhub.dependencies import get_current_user, require_admin
from learnhub.services.stats import merge_stats

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Get current user's profile, preferences and stats."""
    return current_user


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    update_data: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Replace the profile and/or preferences documents."""
    if update_data.profile is not None:
        current_user.profile = update_data.profile.model_dump(exclude_none=True)
    if update_data.preferences is not None:
        current_user.preferences = update_data.preferences.model_dump(exclude_none=True)

    db.commit()
    db.refresh(current_user)
    return current_user


@router.get("/stats", response_model=UserStats)
async def get_stats(current_user: User = Depends(get_current_user)):
    return UserStats(**(current_user.stats or {}))


@router.put("/stats", response_model=UserStats)
async def update_stats(
    update_data: StatsUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partially overwrite the running stats."""
    stats = merge_stats(current_user, update_data.model_dump(exclude_none=True))
    db.commit()
    return UserStats(**stats)


# Admin routes
@router.get("", response_model=Page[UserResponse])
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    role: Optional[Role] = None,
    is_active: Optional[bool] = None,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    if is_active is not None:
        query = query.filter(User.is_active == is_active)

    total = query.count()
    users = (
        query.order_by(User.created_at.desc(), User.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    items = [UserResponse.model_validate(user) for user in users]
    return Page[UserResponse].build(items, total, page, limit)


def _user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return _user_or_404(db, user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    update_data: AdminUserUpdateRequest,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    user = _user_or_404(db, user_id)

    if update_data.email and update_data.email.lower() != user.email:
        email = update_data.email.lower()
        if db.query(User).filter(User.email == email).first():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already in use",
            )
        user.email = email
    if update_data.name is not None:
        user.name = update_data.name.strip()
    if update_data.role is not None:
        user.role = update_data.role
    if update_data.is_active is not None:
        user.is_active = update_data.is_active
    if update_data.profile is not None:
        user.profile = update_data.profile.model_dump(exclude_none=True)
    if update_data.preferences is not None:
        user.preferences = update_data.preferences.model_dump(exclude_none=True)

    db.commit()
    db.refresh(user)
    return user


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    admin: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Delete a user together with their ideas and interviews."""
    user = _user_or_404(db, user_id)
    db.delete(user)
    db.commit()
    return {"status": "ok", "message": "User deleted successfully"}
