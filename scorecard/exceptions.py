# scorecard/exceptions.py
"""
Error types raised at the remote API boundary.

- AuthError: bad credentials, missing token, expired/invalid token (HTTP 401)
- ApiError: any other collaborator fault (transport, status, payload shape)
"""

from typing import Optional


class ScorecardError(Exception):
    """Base class for errors surfaced by the scorecard client."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


class AuthError(ScorecardError):
    """Authentication failed or the credential is no longer accepted."""


class ApiError(ScorecardError):
    """A remote call failed or returned an unusable payload."""

    def __init__(
        self,
        message: str,
        detail: Optional[str] = None,
        status_code: Optional[int] = None
    ):
        super().__init__(message, detail)
        self.status_code = status_code


__all__ = [
    'ScorecardError',
    'AuthError',
    'ApiError',
]
