"""Path resolution from local document paths to page titles.

The root page title anchors the hierarchy: everything after its first
occurrence in a document path becomes page ancestry, and the file name
(minus its extension) becomes the document's own page title.
"""

import re
from typing import List

from src.models.document import ResolvedPath

_SEPARATORS = re.compile(r'[/\\]+')
_EXTENSION = re.compile(r'\.[^/\\.]+$')


def relative_path(full_path: str, root_title: str) -> str:
    """Return the part of ``full_path`` after the first ``root_title``.

    Leading separators are stripped. Returns an empty string if the root
    title does not occur in the path.

    Example:
        >>> relative_path("Vault/Root/Proj/Design.md", "Root")
        'Proj/Design.md'
    """
    if not root_title:
        return ""
    index = full_path.find(root_title)
    if index < 0:
        return ""
    return full_path[index + len(root_title):].lstrip('/\\')


def ancestor_folders(rel_path: str) -> List[str]:
    """Folder names between the root and the document, root first."""
    parts = _SEPARATORS.split(rel_path)
    if len(parts) <= 1:
        return []
    return parts[:-1]


def strip_extension(file_name: str) -> str:
    return _EXTENSION.sub('', file_name)


def leaf_name(path: str) -> str:
    """File name of ``path`` without its final extension.

    Example:
        >>> leaf_name("notes/a.b.md")
        'a.b'
    """
    return strip_extension(_SEPARATORS.split(path)[-1])


def resolve_path(full_path: str, root_title: str) -> ResolvedPath:
    """Resolve a document path into relative path, ancestors and leaf title.

    Args:
        full_path: Document path, slash or backslash separated
        root_title: Title of the configured root page

    Returns:
        ResolvedPath for the document
    """
    rel_path = relative_path(full_path, root_title)
    return ResolvedPath(
        relative_path=rel_path,
        leaf_name=leaf_name(full_path),
        ancestor_folders=ancestor_folders(rel_path),
    )
