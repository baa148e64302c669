#!/usr/bin/env python3
"""
Notification endpoints - read the caller's in-app inbox.

In-app messages are held in the memory of the API process that delivered
them, so this only sees messages sent by the same process. Webhook delivery
is unaffected.
"""

import logging
from fastapi import APIRouter, Depends, Query

from notification.channels import InAppChannel
from ..dependencies import CallerIdentity, get_caller
from ..models.responses import InboxResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/inbox", response_model=InboxResponse)
def get_inbox(
    limit: int = Query(default=None, ge=1, le=InAppChannel.max_per_user, description="Newest messages to return"),
    caller: CallerIdentity = Depends(get_caller)
):
    """Newest-first in-app messages for the caller."""
    messages = list(reversed(InAppChannel.messages_for(caller.user_id)))
    if limit is not None:
        messages = messages[:limit]
    return {
        "success": True,
        "user_id": caller.user_id,
        "count": len(messages),
        "messages": messages,
    }
