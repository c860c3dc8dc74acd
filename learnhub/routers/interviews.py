from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from learnhub.database import get_db
from learnhub.dependencies import get_current_user
from learnhub.models.user import User
from learnhub.schemas.common import Page
from learnhub.schemas.interview import (
    InterviewCreate,
    InterviewFeedbackResponse,
    InterviewResponse,
    InterviewResponseEntry,
    InterviewUpdate,
    Mode,
    PublicInterviewResponse,
    ResponseSubmit,
)
from learnhub.services.enrichment import EnrichmentGateway, get_enrichment_gateway
from learnhub.services.interviews import (
    complete_interview,
    create_interview,
    delete_interview,
    get_feedback,
    get_interview,
    list_interviews,
    list_public_interviews,
    start_interview,
    submit_response,
    update_interview,
)

router = APIRouter(prefix="/api/interviews", tags=["interviews"])


def _owned_interview(db: Session, interview_id: int, user: User):
    interview = get_interview(db, interview_id, user.id)
    if not interview:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Interview not found")
    return interview


@router.post("", response_model=InterviewResponse, status_code=status.HTTP_201_CREATED)
async def create(
    request: InterviewCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a draft interview."""
    return create_interview(
        db=db,
        user=current_user,
        title=request.title.strip(),
        mode=request.mode,
        configuration=request.configuration.model_dump(exclude_none=True),
        tags=request.tags,
        is_public=request.is_public,
    )


@router.get("", response_model=Page[InterviewResponse])
async def list_my_interviews(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
    mode: Optional[Mode] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    interviews, total = list_interviews(db, current_user.id, page, limit, status_filter, mode)
    items = [InterviewResponse.model_validate(interview) for interview in interviews]
    return Page[InterviewResponse].build(items, total, page, limit)


@router.get("/public", response_model=Page[PublicInterviewResponse])
async def list_shared_interviews(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    mode: Optional[Mode] = None,
    db: Session = Depends(get_db),
):
    """Interviews their owners chose to share. No authentication required."""
    interviews, total = list_public_interviews(db, page, limit, mode)
    items = [PublicInterviewResponse.model_validate(interview) for interview in interviews]
    return Page[PublicInterviewResponse].build(items, total, page, limit)


@router.get("/{interview_id}", response_model=InterviewResponse)
async def read(
    interview_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _owned_interview(db, interview_id, current_user)


@router.get("/{interview_id}/feedback", response_model=InterviewFeedbackResponse)
async def read_feedback(
    interview_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    interview = _owned_interview(db, interview_id, current_user)
    return get_feedback(interview)


@router.put("/{interview_id}", response_model=InterviewResponse)
async def update(
    interview_id: int,
    request: InterviewUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    interview = _owned_interview(db, interview_id, current_user)
    changes = request.model_dump(exclude_unset=True)
    if request.configuration is not None:
        changes["configuration"] = request.configuration.model_dump(exclude_none=True)
    return update_interview(db, interview, changes)


@router.delete("/{interview_id}")
async def delete(
    interview_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    interview = _owned_interview(db, interview_id, current_user)
    delete_interview(db, interview)
    return {"status": "ok", "message": "Interview deleted successfully"}


@router.post("/{interview_id}/start", response_model=InterviewResponse)
async def start(
    interview_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: EnrichmentGateway = Depends(get_enrichment_gateway),
):
    """Generate questions and begin the interview."""
    interview = _owned_interview(db, interview_id, current_user)
    return await start_interview(db, gateway, interview)


@router.post("/{interview_id}/responses", response_model=InterviewResponseEntry)
async def respond(
    interview_id: int,
    request: ResponseSubmit,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    interview = _owned_interview(db, interview_id, current_user)
    return submit_response(
        db,
        interview,
        question_id=request.question_id,
        answer_text=request.answer_text,
        response_time=request.response_time,
        audio_url=str(request.audio_url) if request.audio_url else None,
    )


@router.post("/{interview_id}/complete", response_model=InterviewResponse)
async def complete(
    interview_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: EnrichmentGateway = Depends(get_enrichment_gateway),
):
    """Score the interview and update the user's running stats."""
    interview = _owned_interview(db, interview_id, current_user)
    return await complete_interview(db, gateway, interview)
