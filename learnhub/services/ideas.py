"""Idea refiner lifecycle: draft/processing -> completed | error."""

import logging
import time
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from learnhub.models.idea import Idea
from learnhub.models.user import User
from learnhub.services.enrichment import EnrichmentGateway
from learnhub.services.stats import lock_owner, record_idea_refined

logger = logging.getLogger(__name__)

DEFAULT_TONE = "persuasive"
PROCESSING_ERROR_MESSAGE = "AI processing failed. Please try again."


def get_idea(db: Session, idea_id: int, user_id: int) -> Optional[Idea]:
    """Get an idea by ID for a specific owner."""
    return db.query(Idea).filter(
        Idea.id == idea_id,
        Idea.user_id == user_id,
    ).first()


def list_ideas(
    db: Session,
    user_id: int,
    page: int = 1,
    limit: int = 10,
    status_filter: Optional[str] = None,
    context: Optional[str] = None,
) -> tuple[list[Idea], int]:
    query = db.query(Idea).filter(Idea.user_id == user_id)
    if status_filter:
        query = query.filter(Idea.status == status_filter)
    if context:
        query = query.filter(Idea.context == context)

    total = query.count()
    ideas = (
        query.order_by(Idea.created_at.desc(), Idea.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return ideas, total


async def _run_enrichment(
    db: Session,
    gateway: EnrichmentGateway,
    idea: Idea,
    context: str,
    tone: str,
) -> Idea:
    """Run structure -> feedback -> outputs and persist the terminal state.

    Results are written together in a single commit; a failure anywhere in
    the chain discards everything produced so far.
    """
    started = time.time()
    try:
        structured_content = await gateway.structure(idea.original_input, context, tone)
        if not structured_content:
            raise ValueError("empty structured content")
        feedback = await gateway.feedback(structured_content)
        outputs = await gateway.outputs(structured_content, context)
    except Exception as e:
        logger.warning("Idea %s enrichment failed: %s", idea.id, e)
        idea.status = "error"
        idea.structured_content = {}
        idea.outputs = {}
        idea.feedback = {"error": PROCESSING_ERROR_MESSAGE}
        idea.ai_processing_time = None
        db.commit()
        db.refresh(idea)
        return idea

    idea.structured_content = structured_content
    idea.feedback = feedback
    idea.outputs = outputs
    idea.ai_processing_time = int((time.time() - started) * 1000)
    idea.status = "completed"
    record_idea_refined(lock_owner(db, idea.user_id))
    db.commit()
    db.refresh(idea)
    logger.info("Idea %s -> completed", idea.id)
    return idea


async def create_idea(
    db: Session,
    gateway: EnrichmentGateway,
    user: User,
    title: str,
    original_input: str,
    context: str,
    tone: Optional[str] = None,
) -> Idea:
    """Create an idea in `processing` and resolve it through enrichment."""
    tone = tone or DEFAULT_TONE
    idea = Idea(
        user_id=user.id,
        title=title,
        original_input=original_input,
        context=context,
        customization={"tone": tone},
        status="processing",
    )
    db.add(idea)
    db.commit()
    db.refresh(idea)

    return await _run_enrichment(db, gateway, idea, context, tone)


async def reprocess_idea(
    db: Session,
    gateway: EnrichmentGateway,
    idea: Idea,
    tone: Optional[str] = None,
    context: Optional[str] = None,
) -> Idea:
    """Re-run enrichment on the stored input, optionally with a new tone/context."""
    if context:
        idea.context = context
    if tone:
        idea.customization = {**(idea.customization or {}), "tone": tone}
    # Content from the previous run is cleared; only a completed idea carries any.
    idea.status = "processing"
    idea.structured_content = {}
    idea.outputs = {}
    idea.feedback = {}
    idea.ai_processing_time = None
    db.commit()
    db.refresh(idea)

    current_tone = (idea.customization or {}).get("tone") or DEFAULT_TONE
    return await _run_enrichment(db, gateway, idea, idea.context, current_tone)


def record_view(db: Session, idea: Idea) -> Idea:
    """Increment the view counter in SQL so concurrent reads never lose a view."""
    db.query(Idea).filter(Idea.id == idea.id).update(
        {Idea.views: Idea.views + 1}, synchronize_session=False
    )
    db.commit()
    db.refresh(idea)
    return idea


def update_idea(db: Session, idea: Idea, changes: dict) -> Idea:
    """Shallow-merge the supplied fields. Never re-triggers enrichment."""
    tone = changes.pop("tone", None)
    if tone:
        idea.customization = {**(idea.customization or {}), "tone": tone}

    for field in ("title", "original_input", "context", "tags", "is_public"):
        value = changes.get(field)
        if value is not None:
            setattr(idea, field, value)

    db.commit()
    db.refresh(idea)
    return idea


def delete_idea(db: Session, idea: Idea) -> None:
    db.delete(idea)
    db.commit()


async def summarize_idea(gateway: EnrichmentGateway, idea: Idea) -> str:
    """Generate a transient summary of a processed idea. Nothing is persisted."""
    if not idea.structured_content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Idea must be processed first",
        )
    return await gateway.summary(idea.structured_content)
