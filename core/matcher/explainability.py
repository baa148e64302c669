"""Qualitative tags explaining why a mentor was ranked."""
from typing import List

from core.config_loader import MatchingConfig
from core.mentors.models import MentorProfile


def mentor_strengths(mentor: MentorProfile, config: MatchingConfig) -> List[str]:
    metrics = mentor.metrics
    strengths = []
    if metrics.average_rating > config.highly_rated_threshold:
        strengths.append("Highly Rated")
    if metrics.total_sessions > config.experienced_sessions_threshold:
        strengths.append("Experienced Mentor")
    if metrics.response_time_hours is not None and metrics.response_time_hours < config.quick_response_hours:
        strengths.append("Quick Responder")
    return strengths


def match_reasons(mentor: MentorProfile, config: MatchingConfig) -> List[str]:
    reasons = []
    if mentor.expertise:
        reasons.append(f"Expertise in {mentor.expertise[0].category}")
    if mentor.metrics.success_rate > config.high_success_rate:
        reasons.append("High success rate with students")
    return reasons
