"""Running aggregates kept in the User.stats document."""

from sqlalchemy.orm import Session
from learnhub.models.user import User, default_stats


def running_average(previous_average: float, count: int, new_score: float) -> float:
    """Mean of `count` scores given the mean of the first `count - 1`."""
    if count < 1:
        raise ValueError("count must be at least 1")
    if count == 1:
        return float(new_score)
    return (previous_average * (count - 1) + new_score) / count


def lock_owner(db: Session, user_id: int) -> User:
    """Re-read a user row, replacing any copy already in the session.

    The row stays locked until commit where the database supports row locks.
    """
    return (
        db.query(User)
        .filter(User.id == user_id)
        .populate_existing()
        .with_for_update()
        .one()
    )


def _current_stats(user: User) -> dict:
    # Always hand back a fresh dict; JSONText only persists reassignment.
    stats = default_stats()
    stats.update(user.stats or {})
    return stats


def record_idea_refined(user: User) -> dict:
    stats = _current_stats(user)
    stats["ideas_refined"] = int(stats["ideas_refined"] or 0) + 1
    user.stats = stats
    return stats


def record_interview_completed(user: User, score: float, duration_seconds: int = 0) -> dict:
    stats = _current_stats(user)
    completed = int(stats["interviews_completed"] or 0) + 1
    stats["interviews_completed"] = completed
    stats["average_score"] = running_average(float(stats["average_score"] or 0), completed, score)
    stats["total_practice_time"] = int(stats["total_practice_time"] or 0) + round(duration_seconds / 60)
    user.stats = stats
    return stats


def merge_stats(user: User, changes: dict) -> dict:
    stats = _current_stats(user)
    stats.update(changes)
    user.stats = stats
    return stats
