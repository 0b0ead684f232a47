"""
Domain exceptions.

Typed exceptions for explicit error handling.
Normalization problems and store failures are distinct types so callers
can tell a bad record apart from an unreachable store.
"""

from __future__ import annotations

from typing import Optional


# ═══════════════════════════════════════════════════════════
# BASE EXCEPTION
# ═══════════════════════════════════════════════════════════


class DomainError(Exception):
    """
    Base exception for all dietlog errors.

    Allows catching every engine error with a single except clause.
    """

    pass


# ═══════════════════════════════════════════════════════════
# VALIDATION EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class ValidationError(DomainError):
    """
    Raw meal record is malformed and unusable locally.

    Raised when:
    - foodName is missing or blank
    - timestamp does not parse to a valid instant
    - severity is present without a symptom
    - categories has an unsupported shape

    Example:
        >>> raise ValidationError("foodName is required", field="foodName")
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


# ═══════════════════════════════════════════════════════════
# STORE EXCEPTIONS
# ═══════════════════════════════════════════════════════════


class StoreError(DomainError):
    """
    Remote meal store call failed.

    Base class for transport and remote failures.
    """

    pass


class TransportError(StoreError):
    """
    No response reached the store.

    Raised when:
    - Network error
    - Request timed out
    - Client used outside its session context

    Example:
        >>> raise TransportError("Meal API timeout after 10s")
    """

    pass


class RemoteError(StoreError):
    """
    Store responded with a non-success status.

    Example:
        >>> raise RemoteError(500, body="Internal Server Error")
    """

    def __init__(self, status: int, body: Optional[str] = None, message: Optional[str] = None) -> None:
        super().__init__(message or f"Meal API error: {status}")
        self.status = status
        self.body = body


class NotFoundError(RemoteError):
    """
    Meal id has no corresponding record in the store.

    Example:
        >>> raise NotFoundError("abc123")
    """

    def __init__(self, meal_id: str, body: Optional[str] = None) -> None:
        super().__init__(404, body=body, message=f"Meal {meal_id} not found")
        self.meal_id = meal_id


__all__ = [
    "DomainError",
    "ValidationError",
    "StoreError",
    "TransportError",
    "RemoteError",
    "NotFoundError",
]
