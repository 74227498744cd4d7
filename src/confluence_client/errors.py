"""Typed exception hierarchy for Confluence-related errors.

This module defines all custom exceptions used by the Confluence client library.
All exceptions inherit from ConfluenceError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import List, Optional


class SyncError(Exception):
    """Base exception for all wiki-publish errors.

    Use this to catch any application-level error from the publish tool.
    """
    pass


class ConfluenceError(SyncError):
    """Base exception for all Confluence-related errors."""
    pass


class MissingCredentialsError(ConfluenceError):
    """Raised when the host URL or session cookie is not configured."""

    def __init__(self, missing: List[str]):
        super().__init__(
            f"Missing Confluence credentials: {', '.join(missing)}"
        )
        self.missing = missing


class RemoteCallError(ConfluenceError):
    """Raised when Confluence answers with a non-2xx status.

    Version conflicts (409) are reported through this same error; use
    ``is_version_conflict`` to tell them apart.
    """

    def __init__(self, operation: str, status_code: int, body: Optional[str] = None):
        super().__init__(f"HTTP Error {status_code} during {operation}")
        self.operation = operation
        self.status_code = status_code
        self.body = body or ""

    @property
    def is_version_conflict(self) -> bool:
        return self.status_code == 409

    @property
    def is_auth_failure(self) -> bool:
        return self.status_code in (401, 403)


class RemoteTimeoutError(ConfluenceError):
    """Raised when a remote call does not answer within the configured deadline."""

    def __init__(self, operation: str, timeout: float):
        super().__init__(f"{operation} timed out after {timeout}s")
        self.operation = operation
        self.timeout = timeout


class APIUnreachableError(ConfluenceError):
    """Raised when the Confluence API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class UnexpectedResponseError(ConfluenceError):
    """Raised when a 200 response cannot be decoded into the expected shape."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Unexpected response from {operation}: {reason}")
        self.operation = operation
        self.reason = reason
