"""API route handlers."""

from .mentors import router as mentors_router
from .matches import router as matches_router
from .sessions import router as sessions_router
from .notifications import router as notifications_router
