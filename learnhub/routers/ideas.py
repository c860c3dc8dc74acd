from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from learnhub.database import get_db
from learnhub.dependencies import get_current_user
from learnhub.models.user import User
from learnhub.schemas.common import Page
from learnhub.schemas.idea import (
    Context,
    IdeaCreate,
    IdeaReprocess,
    IdeaResponse,
    IdeaSummaryResponse,
    IdeaUpdate,
)
from learnhub.services.enrichment import EnrichmentGateway, get_enrichment_gateway
from learnhub.services.ideas import (
    create_idea,
    delete_idea,
    get_idea,
    list_ideas,
    record_view,
    reprocess_idea,
    summarize_idea,
    update_idea,
)

router = APIRouter(prefix="/api/ideas", tags=["ideas"])


def _owned_idea(db: Session, idea_id: int, user: User):
    idea = get_idea(db, idea_id, user.id)
    if not idea:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Idea not found")
    return idea


@router.post("", response_model=IdeaResponse, status_code=status.HTTP_201_CREATED)
async def create(
    request: IdeaCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: EnrichmentGateway = Depends(get_enrichment_gateway),
):
    """Create an idea and structure it with AI.

    Answers 201 even when enrichment fails; the idea then has status "error".
    """
    return await create_idea(
        db=db,
        gateway=gateway,
        user=current_user,
        title=request.title.strip(),
        original_input=request.original_input.strip(),
        context=request.context,
        tone=request.tone,
    )


@router.get("", response_model=Page[IdeaResponse])
async def list_my_ideas(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status_filter: Optional[str] = Query(None, alias="status"),
    context: Optional[Context] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ideas, total = list_ideas(db, current_user.id, page, limit, status_filter, context)
    items = [IdeaResponse.model_validate(idea) for idea in ideas]
    return Page[IdeaResponse].build(items, total, page, limit)


@router.get("/{idea_id}", response_model=IdeaResponse)
async def read(
    idea_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get a single idea. Every successful read counts as a view."""
    idea = _owned_idea(db, idea_id, current_user)
    return record_view(db, idea)


@router.put("/{idea_id}", response_model=IdeaResponse)
async def update(
    idea_id: int,
    request: IdeaUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    idea = _owned_idea(db, idea_id, current_user)
    return update_idea(db, idea, request.model_dump(exclude_unset=True))


@router.delete("/{idea_id}")
async def delete(
    idea_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    idea = _owned_idea(db, idea_id, current_user)
    delete_idea(db, idea)
    return {"status": "ok", "message": "Idea deleted successfully"}


@router.post("/{idea_id}/reprocess", response_model=IdeaResponse)
async def reprocess(
    idea_id: int,
    request: Optional[IdeaReprocess] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: EnrichmentGateway = Depends(get_enrichment_gateway),
):
    """Re-run enrichment. A failed run answers 200 with status "error"."""
    idea = _owned_idea(db, idea_id, current_user)
    request = request or IdeaReprocess()
    return await reprocess_idea(db, gateway, idea, tone=request.tone, context=request.context)


@router.post("/{idea_id}/summary", response_model=IdeaSummaryResponse)
async def summary(
    idea_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    gateway: EnrichmentGateway = Depends(get_enrichment_gateway),
):
    idea = _owned_idea(db, idea_id, current_user)
    text = await summarize_idea(gateway, idea)
    return IdeaSummaryResponse(id=idea.id, summary=text)
