"""Typed results of a page lookup by space and title."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class PageFound:
    """A page that exists in Confluence.

    Attributes:
        page_id: Confluence page ID (positive, never reused)
        version: Current version number (0 when the response omits it)
        title: Page title as returned by Confluence
    """
    page_id: int
    version: int
    title: str


@dataclass(frozen=True)
class PageNotFound:
    """No page with this title exists in the space."""
    space_key: str
    title: str


PageLookup = Union[PageFound, PageNotFound]
