"""Mentor Module - profiles, metrics and the mentor directory."""
from core.mentors.models import (
    MentorStatus, ExpertiseArea, AvailabilityWindow, MentorMetrics, MentorProfile
)
from core.mentors.directory import MentorDirectory

__all__ = [
    'MentorDirectory',
    'MentorStatus', 'ExpertiseArea', 'AvailabilityWindow',
    'MentorMetrics', 'MentorProfile',
]
