"""Document and resolved path data models."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Document:
    """A local document to publish.

    Attributes:
        path: Path of the document, slash or backslash separated. The segment
              matching the root page title anchors the page hierarchy.
        content: Rendered body, passed through to Confluence untouched
    """
    path: str
    content: str


@dataclass
class ResolvedPath:
    """Where a document lands in the page tree.

    Attributes:
        relative_path: Path below the root title (empty if the title is absent)
        ancestor_folders: Folder names from the root down to the immediate parent
        leaf_name: Page title for the document itself (file name without extension)
    """
    relative_path: str
    leaf_name: str
    ancestor_folders: List[str] = field(default_factory=list)
