"""Interview simulator lifecycle: draft -> in-progress -> completed."""

import logging
from datetime import datetime
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError
from learnhub.errors import StatsUpdateError
from learnhub.models.interview import Interview
from learnhub.models.user import User
from learnhub.services.enrichment import EnrichmentGateway
from learnhub.services.stats import lock_owner, record_interview_completed

logger = logging.getLogger(__name__)


def _require_status(interview: Interview, expected: str, detail: str) -> None:
    if interview.status != expected:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def extract_score(feedback: dict) -> float:
    """Overall score from a feedback document, 0 when absent or not numeric."""
    value = feedback.get("overall_score") if isinstance(feedback, dict) else None
    if isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def create_interview(
    db: Session,
    user: User,
    title: str,
    mode: str,
    configuration: dict,
    tags: Optional[list] = None,
    is_public: bool = False,
) -> Interview:
    interview = Interview(
        user_id=user.id,
        title=title,
        mode=mode,
        configuration=configuration,
        tags=tags or [],
        is_public=is_public,
        status="draft",
    )
    db.add(interview)
    db.commit()
    db.refresh(interview)
    return interview


def get_interview(db: Session, interview_id: int, user_id: int) -> Optional[Interview]:
    """Get an interview by ID for a specific owner."""
    return db.query(Interview).filter(
        Interview.id == interview_id,
        Interview.user_id == user_id,
    ).first()


def list_interviews(
    db: Session,
    user_id: int,
    page: int = 1,
    limit: int = 10,
    status_filter: Optional[str] = None,
    mode: Optional[str] = None,
) -> tuple[list[Interview], int]:
    query = db.query(Interview).filter(Interview.user_id == user_id)
    if status_filter:
        query = query.filter(Interview.status == status_filter)
    if mode:
        query = query.filter(Interview.mode == mode)

    total = query.count()
    interviews = (
        query.order_by(Interview.created_at.desc(), Interview.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return interviews, total


def list_public_interviews(
    db: Session,
    page: int = 1,
    limit: int = 10,
    mode: Optional[str] = None,
) -> tuple[list[Interview], int]:
    query = db.query(Interview).filter(Interview.is_public == True)  # noqa: E712
    if mode:
        query = query.filter(Interview.mode == mode)

    total = query.count()
    interviews = (
        query.options(joinedload(Interview.user))
        .order_by(Interview.created_at.desc(), Interview.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return interviews, total


def update_interview(db: Session, interview: Interview, changes: dict) -> Interview:
    """Edit a draft interview. Started interviews are frozen."""
    _require_status(interview, "draft", "Cannot update interview that has been started")

    for field in ("title", "configuration", "tags", "is_public"):
        value = changes.get(field)
        if value is not None:
            setattr(interview, field, value)

    db.commit()
    db.refresh(interview)
    return interview


def delete_interview(db: Session, interview: Interview) -> None:
    db.delete(interview)
    db.commit()


async def start_interview(db: Session, gateway: EnrichmentGateway, interview: Interview) -> Interview:
    """Generate questions and move a draft interview to in-progress."""
    _require_status(interview, "draft", "Interview has already been started or completed")

    questions = await gateway.questions(interview.configuration or {})

    interview.questions = questions
    interview.status = "in-progress"
    interview.started_at = datetime.utcnow()
    db.commit()
    db.refresh(interview)
    logger.info("Interview %s -> in-progress (%d questions)", interview.id, len(questions))
    return interview


def submit_response(
    db: Session,
    interview: Interview,
    question_id: str,
    answer_text: Optional[str] = None,
    response_time: Optional[int] = None,
    audio_url: Optional[str] = None,
) -> dict:
    """Append one response. Resubmitting the same question adds another entry."""
    _require_status(interview, "in-progress", "Interview is not in progress")

    entry = {
        "question_id": question_id,
        "answer_text": answer_text,
        "response_time": response_time,
        "audio_url": audio_url,
        "submitted_at": datetime.utcnow().isoformat(),
    }
    # The version column turns this read-modify-write into a compare-and-swap.
    interview.responses = [*(interview.responses or []), entry]
    db.commit()
    db.refresh(interview)
    return entry


async def complete_interview(db: Session, gateway: EnrichmentGateway, interview: Interview) -> Interview:
    """Score the interview and fold the result into the owner's stats.

    Both writes share one transaction: the interview update is flushed first,
    then the stats update. A failure in the second step rolls back both and
    raises StatsUpdateError.
    """
    _require_status(interview, "in-progress", "Interview is not in progress")

    feedback = await gateway.interview_feedback(
        interview.questions or [],
        interview.responses or [],
        interview.configuration or {},
    )
    score = extract_score(feedback)

    completed_at = datetime.utcnow()
    started_at = interview.started_at or completed_at
    duration = int((completed_at - started_at).total_seconds())

    interview.status = "completed"
    interview.completed_at = completed_at
    interview.duration = duration
    interview.score = score
    interview.feedback = feedback
    db.flush()

    try:
        owner = lock_owner(db, interview.user_id)
        record_interview_completed(owner, score, duration)
        db.flush()
    except StaleDataError:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error("Stats update failed for interview %s: %s", interview.id, e)
        raise StatsUpdateError("Interview could not be completed: updating user stats failed") from e

    db.commit()
    db.refresh(interview)
    logger.info("Interview %s -> completed (score %.1f)", interview.id, score)
    return interview


def get_feedback(interview: Interview) -> dict:
    _require_status(interview, "completed", "Interview is not completed yet")
    return {
        "id": interview.id,
        "feedback": interview.feedback or {},
        "score": interview.score,
        "completed_at": interview.completed_at,
    }
