from database.repositories.interfaces import MentorRepository, SessionRepository
from database.repositories.memory import InMemoryMentorRepository, InMemorySessionRepository

__all__ = [
    'MentorRepository',
    'SessionRepository',
    'InMemoryMentorRepository',
    'InMemorySessionRepository',
]
