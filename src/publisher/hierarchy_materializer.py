"""Creates the folder pages above a document, one level at a time.

Each folder in a document's path is mirrored by a container page whose body
is a page tree of its children. Folder pages are looked up by title; missing
ones are created under the previous level and then looked up again, since a
create does not hand back the new page's ID.
"""

import logging
from typing import List, Optional

from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.errors import ConfluenceError

from .body_templates import container_body
from .cancellation import CancellationToken
from .errors import AncestorCreationError, CacheFilesystemError, PublishStep
from .identity_cache import IdentityCache

logger = logging.getLogger(__name__)


class HierarchyMaterializer:
    """Ensures every folder of a path exists as a page under the root.

    Levels are handled strictly in order because each level's ancestor is
    the ID resolved for the level above it. The first failure ends the walk;
    pages created before it are left in place.

    Example:
        >>> materializer = HierarchyMaterializer(api, cache)
        >>> parent_id = materializer.ensure_ancestor_chain("DOCS", ["Proj", "Specs"], 100)
    """

    def __init__(self, api: APIWrapper, identity_cache: IdentityCache):
        self.api = api
        self.identity_cache = identity_cache

    def ensure_ancestor_chain(
        self,
        space: str,
        ancestor_folders: List[str],
        root_page_id: int,
        cancel_token: Optional[CancellationToken] = None,
    ) -> int:
        """Resolve or create each folder page and return the document's parent ID.

        Args:
            space: The space key
            ancestor_folders: Folder names ordered from the root down
            root_page_id: ID of the configured root page
            cancel_token: Checked before each folder is handled

        Returns:
            ID of the last folder page, or root_page_id if there are no folders

        Raises:
            AncestorCreationError: If a folder page cannot be resolved or created
            PublishCancelledError: If cancel_token is cancelled
        """
        parent_id = root_page_id

        for folder in ancestor_folders:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled(PublishStep.ANCESTOR_CREATION)

            try:
                page_id = self.identity_cache.resolve(space, folder)
                logger.info(f"Folder: {folder}, PageId: {page_id}")
                if page_id is None:
                    page_id = self._create_folder_page(space, parent_id, folder)
            except (ConfluenceError, CacheFilesystemError) as e:
                raise AncestorCreationError(folder, parent_id, str(e)) from e

            parent_id = page_id

        return parent_id

    def _create_folder_page(self, space: str, parent_id: int, folder: str) -> int:
        logger.info(f"Creating folder page '{folder}' under page {parent_id}")
        created = self.api.create_page(
            space,
            parent_id,
            folder,
            container_body(folder),
        )
        if not created:
            raise AncestorCreationError(folder, parent_id, "create was not accepted")

        page_id = self.identity_cache.resolve(space, folder)
        if page_id is None:
            raise AncestorCreationError(
                folder, parent_id, "page not found after creation"
            )
        return page_id
