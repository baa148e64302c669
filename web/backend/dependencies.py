#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.

Authentication happens upstream; the gateway forwards the verified caller
in X-User-Id / X-User-Role / X-User-Type headers and this service trusts
them.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from core.app_context import AppContext
from core.matcher import MatchEngine
from core.mentors import MentorDirectory
from core.sessions import SessionLifecycle


@dataclass(frozen=True)
class CallerIdentity:
    """The authenticated caller as forwarded by the gateway."""
    user_id: str
    role: str = "user"
    user_type: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role.lower() == "admin"


def get_context(request: Request) -> AppContext:
    """
    FastAPI dependency returning the AppContext attached by create_app().

    Usage:
        @router.get("/endpoint")
        def my_endpoint(ctx: AppContext = Depends(get_context)):
            ...
    """
    return request.app.state.context


def get_directory(ctx: AppContext = Depends(get_context)) -> MentorDirectory:
    return ctx.directory


def get_match_engine(ctx: AppContext = Depends(get_context)) -> MatchEngine:
    return ctx.match_engine


def get_lifecycle(ctx: AppContext = Depends(get_context)) -> SessionLifecycle:
    return ctx.lifecycle


def get_caller(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
    x_user_type: Optional[str] = Header(default=None),
) -> CallerIdentity:
    """
    Raises:
        HTTPException: 401 when no X-User-Id header is present
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return CallerIdentity(
        user_id=x_user_id.strip(),
        role=(x_user_role or "user").strip(),
        user_type=x_user_type,
    )


def require_admin(caller: CallerIdentity = Depends(get_caller)) -> CallerIdentity:
    if not caller.is_admin:
        raise HTTPException(status_code=403, detail="Admin role required")
    return caller
