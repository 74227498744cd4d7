"""Data models for documents and Confluence page lookups."""

from src.models.document import Document, ResolvedPath
from src.models.page_lookup import PageFound, PageLookup, PageNotFound

__all__ = ['Document', 'ResolvedPath', 'PageFound', 'PageLookup', 'PageNotFound']
