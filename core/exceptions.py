#!/usr/bin/env python3
"""
Domain exceptions shared by the directory, matcher and session lifecycle.

Every error raised by the core derives from ServiceException so the web
layer can map them to HTTP responses in one place.
"""


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class NotFoundError(ServiceException):
    """Raised when a session or mentor id is unknown."""
    pass


class InvalidStateError(ServiceException):
    """Raised when an operation is not valid for the current lifecycle state."""
    pass


class UnauthorizedError(ServiceException):
    """Raised when the caller lacks the required relationship to a session."""
    pass


class ValidationError(ServiceException):
    """Raised for malformed input, e.g. a scheduling window with end <= start."""
    pass


class StorageIOError(ServiceException, IOError):
    """
    Raised when a storage or channel-provider call fails.

    Unlike the domain errors above this one is retryable; callers may retry
    with backoff. Subclassing IOError lets generic I/O handlers catch it.
    """
    retryable = True
