from learnhub.routers.auth import router as auth_router
from learnhub.routers.users import router as users_router
from learnhub.routers.ideas import router as ideas_router
from learnhub.routers.interviews import router as interviews_router

__all__ = ["auth_router", "users_router", "ideas_router", "interviews_router"]
