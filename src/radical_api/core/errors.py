"""Exceptions raised by services and converted to the JSON error envelope.

Every failure that reaches a client is rendered as ``{"error": ..., "details": ...}``
with ``details`` omitted when there is nothing to add. The HTTP status is a
class attribute so handlers never have to map exception types by hand.
"""

from __future__ import annotations

from typing import Any


class ApiError(RuntimeError):
    """Base exception for failures reported to API clients."""

    status_code: int = 500

    def __init__(self, message: str, *, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        """Return the error envelope for this exception."""
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(ApiError):
    """Missing or malformed input."""

    status_code = 400


class AuthenticationError(ApiError):
    """Login credentials that match an existing account only partially."""

    status_code = 401


class NotFoundError(ApiError):
    """A referenced entity does not exist."""

    status_code = 404


class StoreError(ApiError):
    """Persistence failure in the database or the blob store."""

    status_code = 500


class UpstreamFetchError(ApiError):
    """Failure fetching a document from the static site origin."""

    status_code = 500


__all__ = [
    "ApiError",
    "AuthenticationError",
    "NotFoundError",
    "StoreError",
    "UpstreamFetchError",
    "ValidationError",
]
