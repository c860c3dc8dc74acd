import pytest

from learnhub.models.user import User, default_stats
from learnhub.services.interviews import extract_score
from learnhub.services.stats import merge_stats, record_interview_completed, running_average


def test_running_average_first_value_is_the_score():
    assert running_average(0, 1, 80) == 80


def test_running_average_accumulates():
    assert running_average(80, 2, 60) == 70
    assert running_average(70, 3, 100) == 80


def test_running_average_rejects_zero_count():
    with pytest.raises(ValueError):
        running_average(0, 0, 50)


def test_record_interview_completed_reassigns_document():
    user = User(stats=default_stats())
    original = user.stats

    stats = record_interview_completed(user, 90, duration_seconds=1500)

    assert user.stats is not original
    assert original["interviews_completed"] == 0
    assert stats["interviews_completed"] == 1
    assert stats["average_score"] == 90
    assert stats["total_practice_time"] == 25


def test_record_interview_completed_fills_missing_keys():
    user = User(stats={"interviews_completed": 1, "average_score": 50})

    stats = record_interview_completed(user, 100)

    assert stats["average_score"] == 75
    assert stats["ideas_refined"] == 0


def test_merge_stats_overwrites_only_given_keys():
    user = User(stats=default_stats())

    stats = merge_stats(user, {"ideas_refined": 4})

    assert stats["ideas_refined"] == 4
    assert stats["interviews_completed"] == 0


@pytest.mark.parametrize(
    "feedback, expected",
    [
        ({"overall_score": 72}, 72.0),
        ({"overall_score": "64"}, 64.0),
        ({"overall_score": None}, 0.0),
        ({"overall_score": True}, 0.0),
        ({"ai_feedback": "text"}, 0.0),
    ],
)
def test_extract_score(feedback, expected):
    assert extract_score(feedback) == expected
