#!/usr/bin/env python3
"""
Match endpoints - rank mentors for a mentorship request.
"""

import logging
from fastapi import APIRouter, Depends, Query

from core.matcher import MatchEngine, MatchFilters, MentorshipRequest
from ..dependencies import get_match_engine
from ..models.requests import MentorshipRequestBody
from ..models.responses import MatchesResponse
from ..utils import match_set_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.post("", response_model=MatchesResponse)
def find_matches(
    body: MentorshipRequestBody,
    limit: int = Query(default=None, ge=1, le=100, description="Maximum matches to return"),
    engine: MatchEngine = Depends(get_match_engine)
):
    """
    Rank ACTIVE mentors for the request.

    Scores are in (0.3, 1.0]; equal scores keep directory order.
    """
    request = MentorshipRequest(
        title=body.title,
        description=body.description,
        id=body.id,
        goals=tuple(body.goals),
        preferred_expertise=tuple(body.preferred_expertise),
        filters=MatchFilters(
            expertise_tags=tuple(body.filters.expertise_tags),
            min_budget=body.filters.min_budget,
            max_budget=body.filters.max_budget,
            language=body.filters.language,
        ),
    )
    return match_set_to_response(engine.find_matches(request, limit))
