"""Shared fixtures for publisher tests."""

from typing import Dict, List, Tuple

import pytest

from src.models.page_lookup import PageFound, PageNotFound
from src.publisher.identity_cache import IdentityCache


class FakeConfluenceAPI:
    """In-memory stand-in for APIWrapper that records every call.

    Pages are keyed by (space, title). A successful create makes the page
    visible to later lookups with version 1; a successful update bumps the
    version to the submitted one.
    """

    def __init__(self):
        self.pages: Dict[Tuple[str, str], Dict] = {}
        self.calls: List[Tuple] = []
        self.next_id = 1000
        self.fail_create_for = set()
        self.create_result = True
        self.update_result = True
        self.errors = {}

    def add_page(self, space, title, page_id, version=1, parent_id=None):
        self.pages[(space, title)] = {
            'id': page_id, 'version': version, 'parent_id': parent_id, 'body': '',
        }

    def _raise_if_configured(self, name):
        if name in self.errors:
            raise self.errors[name]

    def find_page(self, space, title):
        self.calls.append(('find_page', space, title))
        self._raise_if_configured('find_page')
        page = self.pages.get((space, title))
        if page is None:
            return PageNotFound(space_key=space, title=title)
        return PageFound(page_id=page['id'], version=page['version'], title=title)

    def create_page(self, space, ancestor_id, title, body):
        self.calls.append(('create_page', space, ancestor_id, title))
        self._raise_if_configured('create_page')
        if title in self.fail_create_for or not self.create_result:
            return False
        self.next_id += 1
        self.pages[(space, title)] = {
            'id': self.next_id, 'version': 1, 'parent_id': ancestor_id, 'body': body,
        }
        return True

    def update_page(self, space, ancestor_id, page_id, expected_version, title, body):
        self.calls.append(('update_page', space, ancestor_id, page_id, expected_version + 1, title))
        self._raise_if_configured('update_page')
        if not self.update_result:
            return False
        page = self.pages[(space, title)]
        page.update(version=expected_version + 1, parent_id=ancestor_id, body=body)
        return True

    def calls_named(self, name):
        return [call for call in self.calls if call[0] == name]


@pytest.fixture
def fake_api():
    return FakeConfluenceAPI()


@pytest.fixture
def saved_mappings():
    """Every mapping passed to the cache's save hook."""
    return []


@pytest.fixture
def identity_cache(fake_api, saved_mappings):
    return IdentityCache(fake_api, save=saved_mappings.append)
