from sqlalchemy import Column, Text, TIMESTAMP, Numeric, Index, func

from .base import Base, JSONType


class MentorProfileRow(Base):
    """
    Mentor profile with embedded expertise, availability and metrics.

    Expertise/availability/metrics are small, always read together with the
    profile and never queried individually, so they are stored as JSON.
    """
    __tablename__ = 'mentor_profile'

    id = Column(Text, primary_key=True)
    user_id = Column(Text, nullable=True)

    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, default='')
    avatar_url = Column(Text, nullable=True)
    bio = Column(Text, default='')
    title = Column(Text, default='')
    company = Column(Text, default='')
    linkedin_url = Column(Text, nullable=True)

    expertise = Column(JSONType, default=list)
    availability = Column(JSONType, default=list)
    languages = Column(JSONType, default=list)
    metrics = Column(JSONType, default=dict)

    hourly_rate = Column(Numeric(10, 2), nullable=True)
    currency = Column(Text, default='USD')
    status = Column(Text, nullable=False, default='ACTIVE')

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_mentor_status', 'status'),
    )
