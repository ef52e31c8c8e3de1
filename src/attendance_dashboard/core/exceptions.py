from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ApiError(DomainError):
    """Raised when a call to the remote attendance API fails."""


class ApiTransportError(ApiError):
    """Connection, timeout or undecodable response body."""


class ApiStatusError(ApiError):
    """Remote API answered with a non-success HTTP status."""

    def __init__(self, status_code: int, message: Optional[str] = None):
        super().__init__(message or f"HTTP error! status: {status_code}")
        self.status_code = status_code
