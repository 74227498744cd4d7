"""Confluence client library for publishing local documents.

This package provides Python abstractions over the Confluence content REST API,
limited to the lookups, creates and updates needed to publish a document tree.
"""

from .errors import (
    SyncError,
    ConfluenceError,
    MissingCredentialsError,
    RemoteCallError,
    RemoteTimeoutError,
    APIUnreachableError,
    UnexpectedResponseError,
)

__all__ = [
    "SyncError",
    "ConfluenceError",
    "MissingCredentialsError",
    "RemoteCallError",
    "RemoteTimeoutError",
    "APIUnreachableError",
    "UnexpectedResponseError",
]
