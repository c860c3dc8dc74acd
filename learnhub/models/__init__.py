from learnhub.models.user import User
from learnhub.models.idea import Idea
from learnhub.models.interview import Interview

__all__ = ["User", "Idea", "Interview"]
