"""Publisher library for mirroring a local document tree into Confluence.

This package resolves local document paths into Confluence page titles,
creates the folder pages above each document, and creates or updates the
document's own page, remembering page IDs between runs.
"""

from .body_templates import container_body, content_body
from .cache_store import CacheStore
from .cancellation import CancellationToken
from .errors import (
    PublishStep,
    PublisherError,
    ConfigError,
    CacheError,
    CacheFilesystemError,
    PublishError,
    RootPageNotFoundError,
    AncestorCreationError,
    PublishFailedError,
    PublishCancelledError,
)
from .hierarchy_materializer import HierarchyMaterializer
from .identity_cache import IdentityCache
from .path_resolver import resolve_path
from .publisher import Publisher

__all__ = [
    'container_body',
    'content_body',
    'CacheStore',
    'CancellationToken',
    'PublishStep',
    'PublisherError',
    'ConfigError',
    'CacheError',
    'CacheFilesystemError',
    'PublishError',
    'RootPageNotFoundError',
    'AncestorCreationError',
    'PublishFailedError',
    'PublishCancelledError',
    'HierarchyMaterializer',
    'IdentityCache',
    'resolve_path',
    'Publisher',
]
