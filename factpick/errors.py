"""
Errors - Exception taxonomy for the engine.

- DataFormatError: dataset is malformed or empty (load time, fatal)
- IllegalStateError: caller misuse (e.g. answering with no pending question)
- InsufficientPoolError: generation budget exhausted

The engine never raises InsufficientPoolError itself: question generation
returns an Exhausted result. Adapters (the API service) raise it when they
need to surface that result as an error.
"""

from __future__ import annotations


class FactPickError(Exception):
    """Base class for engine errors."""


class DataFormatError(FactPickError):
    """Raised when a dataset cannot be turned into an entity pool."""

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or [message]
        super().__init__(message)


class IllegalStateError(FactPickError):
    """Raised when an operation is called in a state that does not allow it."""


class InsufficientPoolError(FactPickError):
    """Raised by adapters when no question could be built from the pool."""

    def __init__(self, attempts: int, reason: str = ""):
        self.attempts = attempts
        self.reason = reason
        message = f"No question could be generated after {attempts} attempt(s)"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
