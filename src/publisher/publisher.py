"""Publishes one document to Confluence under its folder pages.

Workflow for a document:
    1. Resolve its path into folder names and a page title
    2. Make sure each folder exists as a page (HierarchyMaterializer)
    3. Look up the document's own page, bypassing the cache
    4. Update it to the next version if it exists, otherwise create it
"""

import logging
from typing import Optional

from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.errors import ConfluenceError
from src.models.document import Document
from src.models.page_lookup import PageFound

from .body_templates import content_body
from .cancellation import CancellationToken
from .errors import (
    CacheFilesystemError,
    PublishFailedError,
    PublishStep,
    RootPageNotFoundError,
)
from .hierarchy_materializer import HierarchyMaterializer
from .identity_cache import IdentityCache
from .path_resolver import resolve_path

logger = logging.getLogger(__name__)


class Publisher:
    """Creates or updates the Confluence page for a local document.

    Publishing is idempotent: a second publish of the same document finds
    the page created by the first and updates it instead of creating a
    duplicate.

    Example:
        >>> publisher = Publisher(api, cache)
        >>> doc = Document(path="Root/Proj/Design.md", content="# Design")
        >>> publisher.publish("DOCS", 100, "Root", doc)
        True
    """

    def __init__(
        self,
        api: APIWrapper,
        identity_cache: IdentityCache,
        materializer: Optional[HierarchyMaterializer] = None,
    ):
        """Initialize the publisher.

        Args:
            api: APIWrapper for creates and updates
            identity_cache: IdentityCache for page ID resolution
            materializer: HierarchyMaterializer for folder pages (optional,
                          built from api and identity_cache if omitted)
        """
        self.api = api
        self.identity_cache = identity_cache
        self.materializer = materializer or HierarchyMaterializer(api, identity_cache)

    def resolve_root(
        self,
        space: str,
        root_title: str,
        cancel_token: Optional[CancellationToken] = None,
    ) -> int:
        """Resolve the configured root page, using the cache when possible.

        Raises:
            RootPageNotFoundError: If the root page does not exist or cannot
                be looked up or cached
            PublishCancelledError: If cancel_token is cancelled
        """
        if cancel_token is not None:
            cancel_token.raise_if_cancelled(PublishStep.ROOT_RESOLUTION)

        try:
            root_page_id = self.identity_cache.resolve(space, root_title)
        except (ConfluenceError, CacheFilesystemError) as e:
            raise RootPageNotFoundError(space, root_title) from e

        if root_page_id is None:
            raise RootPageNotFoundError(space, root_title)
        return root_page_id

    def publish(
        self,
        space: str,
        root_page_id: int,
        root_title: str,
        document: Document,
        cancel_token: Optional[CancellationToken] = None,
    ) -> bool:
        """Publish a document below the root page.

        Args:
            space: The space key
            root_page_id: ID of the configured root page
            root_title: Title of the root page, used to anchor the path
            document: The document to publish
            cancel_token: Checked before every remote step

        Returns:
            True if Confluence accepted the final create or update

        Raises:
            AncestorCreationError: If a folder page cannot be created
            PublishFailedError: If the document's lookup, create or update
                fails remotely
            PublishCancelledError: If cancel_token is cancelled
        """
        resolved = resolve_path(document.path, root_title)
        logger.info(
            f"Publishing '{document.path}' as '{resolved.leaf_name}' "
            f"(folders: {resolved.ancestor_folders})"
        )

        parent_id = self.materializer.ensure_ancestor_chain(
            space,
            resolved.ancestor_folders,
            root_page_id,
            cancel_token=cancel_token,
        )

        if cancel_token is not None:
            cancel_token.raise_if_cancelled(PublishStep.PUBLISH)

        title = resolved.leaf_name
        body = content_body(document.content)

        try:
            existing = self.identity_cache.lookup(space, title)

            if cancel_token is not None:
                cancel_token.raise_if_cancelled(PublishStep.PUBLISH)

            if isinstance(existing, PageFound) and existing.version > 0:
                logger.info(
                    f"Updating page {existing.page_id} '{title}' "
                    f"from version {existing.version}"
                )
                return self.api.update_page(
                    space,
                    parent_id,
                    existing.page_id,
                    existing.version,
                    title,
                    body,
                )

            logger.info(f"Creating page '{title}' under page {parent_id}")
            return self.api.create_page(space, parent_id, title, body)

        except ConfluenceError as e:
            raise PublishFailedError(title, str(e)) from e
