"""Data models for CLI operations.

This module defines all data models used by the CLI module.
All models use dataclasses for clean, type-safe data structures.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Every document was published
    - GENERAL_ERROR (1): Configuration problem or failed publish
    - CONFLICTS (2): Confluence rejected an update because of a version conflict
    - AUTH_ERROR (3): Missing credentials or rejected session cookie
    - NETWORK_ERROR (4): Timeout or Confluence unreachable

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFLICTS = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


@dataclass
class PublishConfig:
    """Project settings stored in .wiki-publish/config.yaml.

    Attributes:
        space_key: Space to publish into (e.g., "DOCS" or "~ray")
        root_page_title: Title of the existing page everything is published under
        root_folder_path: Local folder whose contents mirror the root page
        cache_path: YAML file holding the title to page ID cache
        request_timeout: Seconds to wait for each Confluence request
    """
    space_key: str
    root_page_title: str
    root_folder_path: str
    cache_path: str = ".wiki-publish/page_ids.yaml"
    request_timeout: float = 30.0


@dataclass
class PublishSummary:
    """Outcome of publishing a batch of documents.

    Attributes:
        published: Paths of documents published successfully
        failed: Paths of documents that failed
    """
    published: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
