from sqlalchemy import Column, Text, TIMESTAMP, ForeignKey, Integer, Float, UniqueConstraint, Index, func
from sqlalchemy.orm import relationship

from .base import Base


class CoachingSessionRow(Base):
    """
    A coaching session and its lifecycle state.

    Participants and feedback live in child tables so that
    "sessions involving user X" is a plain indexed query.
    """
    __tablename__ = 'coaching_session'

    id = Column(Text, primary_key=True)
    mentorship_request_id = Column(Text, nullable=True)
    mentor_id = Column(Text, nullable=False)

    title = Column(Text, nullable=False)
    description = Column(Text, default='')
    session_type = Column(Text, nullable=False, default='MENTORING')
    status = Column(Text, nullable=False, default='SCHEDULED')

    scheduled_start_time = Column(TIMESTAMP(timezone=True), nullable=False)
    scheduled_end_time = Column(TIMESTAMP(timezone=True), nullable=False)
    actual_start_time = Column(TIMESTAMP(timezone=True), nullable=True)
    actual_end_time = Column(TIMESTAMP(timezone=True), nullable=True)

    channel_id = Column(Text, nullable=True)
    recording_url = Column(Text, nullable=True)
    transcript_url = Column(Text, nullable=True)

    rating = Column(Float, nullable=True)  # mean of feedback ratings, one decimal
    notes = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    participants = relationship(
        "SessionParticipantRow",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionParticipantRow.position"
    )
    feedback = relationship(
        "SessionFeedbackRow",
        back_populates="session",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index('idx_session_mentor', 'mentor_id'),
        Index('idx_session_status', 'status'),
        Index('idx_session_start', 'scheduled_start_time'),
    )


class SessionParticipantRow(Base):
    """A non-mentor user attached to a session."""
    __tablename__ = 'session_participant'

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(Text, ForeignKey('coaching_session.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Text, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    session = relationship("CoachingSessionRow", back_populates="participants")

    __table_args__ = (
        UniqueConstraint('session_id', 'user_id', name='uq_session_participant'),
        Index('idx_participant_user', 'user_id'),
    )


class SessionFeedbackRow(Base):
    """One participant's (or the mentor's) rating of a completed session."""
    __tablename__ = 'session_feedback'

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(Text, ForeignKey('coaching_session.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)
    comments = Column(Text, default='')
    submitted_at = Column(TIMESTAMP(timezone=True), nullable=False)

    session = relationship("CoachingSessionRow", back_populates="feedback")

    __table_args__ = (
        UniqueConstraint('session_id', 'user_id', name='uq_session_feedback_user'),
    )
