import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from learnhub.database import get_db
from learnhub.dependencies import get_current_user
from learnhub.models.user import User
from learnhub.schemas.user import (
    AccountUpdateRequest,
    PasswordUpdateRequest,
    RefreshTokenRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
)
from learnhub.services.auth import create_tokens, decode_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate, db: Session = Depends(get_db)):
    """Create an account and sign it in straight away."""
    if _find_by_email(db, payload.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    account = User(
        name=payload.name.strip(),
        email=payload.email.lower(),
        hashed_password=get_password_hash(payload.password),
        role=payload.role,
        last_login=datetime.utcnow(),
    )
    db.add(account)
    db.commit()
    logger.info("Registered user %s (%s)", account.id, account.role)
    return create_tokens(account.id)


@router.post("/login", response_model=TokenResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """OAuth2 password flow; the `username` field carries the email."""
    account = _find_by_email(db, form_data.username)
    # Same answer for unknown email and wrong password.
    if account is None or not verify_password(form_data.password, account.hashed_password):
        raise _unauthorized("Incorrect email or password")
    if not account.is_active:
        raise _unauthorized("User account is disabled")

    account.last_login = datetime.utcnow()
    db.commit()
    return create_tokens(account.id)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshTokenRequest, db: Session = Depends(get_db)):
    claims = decode_token(body.refresh_token)
    if claims.get("type") != "refresh":
        raise _unauthorized("Invalid token type")

    subject = str(claims.get("sub") or "")
    account = db.get(User, int(subject)) if subject.isdigit() else None
    if account is None or not account.is_active:
        raise _unauthorized("User not found or inactive")
    return create_tokens(account.id)


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.get("/logout")
async def logout(current_user: User = Depends(get_current_user)):
    """Tokens are stateless; the client discards them."""
    return {"status": "ok", "message": "Logged out"}


@router.put("/details", response_model=UserResponse)
async def update_details(
    changes: AccountUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Rename the account or move it to another (unused) email."""
    new_email = changes.email.lower() if changes.email else None
    if new_email and new_email != current_user.email:
        if _find_by_email(db, new_email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already in use")
        current_user.email = new_email

    if changes.name is not None:
        current_user.name = changes.name.strip()

    db.commit()
    db.refresh(current_user)
    return current_user


@router.put("/password", response_model=TokenResponse)
async def update_password(
    changes: PasswordUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change password and issue a fresh token pair."""
    if not verify_password(changes.current_password, current_user.hashed_password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Current password is incorrect")

    current_user.hashed_password = get_password_hash(changes.new_password)
    db.commit()
    logger.info("Password changed for user %s", current_user.id)
    return create_tokens(current_user.id)
