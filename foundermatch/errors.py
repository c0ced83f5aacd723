"""
Error types shared by the profile and match services.

Every failure carries an ErrorKind so the CLI (or any other caller) can
switch on the kind instead of on exception classes.
"""

from enum import Enum
from typing import List, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    PRECONDITION = "precondition"
    CONFLICT = "conflict"
    VALIDATION = "validation"
    OPERATIONAL = "operational"


class MatchingError(Exception):
    """Raised by service operations; `kind` says what went wrong."""

    def __init__(self, kind: ErrorKind, message: str, details: Optional[List[str]] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.details = details or []

    def __repr__(self) -> str:
        return f"MatchingError({self.kind.value!r}, {self.message!r})"


def not_found(message: str) -> MatchingError:
    return MatchingError(ErrorKind.NOT_FOUND, message)


def forbidden(message: str) -> MatchingError:
    return MatchingError(ErrorKind.FORBIDDEN, message)


def precondition(message: str) -> MatchingError:
    return MatchingError(ErrorKind.PRECONDITION, message)


def conflict(message: str) -> MatchingError:
    return MatchingError(ErrorKind.CONFLICT, message)


def validation(message: str, details: Optional[List[str]] = None) -> MatchingError:
    return MatchingError(ErrorKind.VALIDATION, message, details)


def operational(message: str) -> MatchingError:
    return MatchingError(ErrorKind.OPERATIONAL, message)
