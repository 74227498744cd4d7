"""Unit tests for publisher.publisher module."""

from unittest.mock import Mock

import pytest

from src.confluence_client.errors import RemoteCallError
from src.models.document import Document
from src.publisher.body_templates import content_body
from src.publisher.cancellation import CancellationToken
from src.publisher.errors import (
    AncestorCreationError,
    CacheFilesystemError,
    PublishCancelledError,
    PublishFailedError,
    PublishStep,
    RootPageNotFoundError,
)
from src.publisher.identity_cache import IdentityCache
from src.publisher.publisher import Publisher

ROOT_ID = 100


@pytest.fixture
def publisher(fake_api, identity_cache):
    return Publisher(fake_api, identity_cache)


@pytest.fixture
def document():
    return Document(path="Vault/Root/Proj/Design.md", content="# Design\n\nBody")


class TestResolveRoot:
    """Test cases for resolve_root."""

    def test_root_found_and_cached(self, fake_api, identity_cache, publisher):
        fake_api.add_page('DOCS', 'Root', ROOT_ID)

        assert publisher.resolve_root('DOCS', 'Root') == ROOT_ID
        assert identity_cache.get('DOCS', 'Root') == ROOT_ID

    def test_root_missing_raises(self, fake_api, publisher):
        with pytest.raises(RootPageNotFoundError) as exc_info:
            publisher.resolve_root('DOCS', 'Root')

        assert exc_info.value.step == PublishStep.ROOT_RESOLUTION
        assert fake_api.calls_named('create_page') == []
        assert fake_api.calls_named('update_page') == []

    def test_root_lookup_error_raises_root_not_found(self, fake_api, publisher):
        fake_api.errors['find_page'] = RemoteCallError('find_page(DOCS, Root)', 401)

        with pytest.raises(RootPageNotFoundError) as exc_info:
            publisher.resolve_root('DOCS', 'Root')

        assert exc_info.value.cause.status_code == 401

    def test_root_cache_write_failure_names_root_resolution(self, fake_api):
        def failing_save(mapping):
            raise CacheFilesystemError("page_ids.yaml", "write", "Permission denied")

        fake_api.add_page('DOCS', 'Root', ROOT_ID)
        publisher = Publisher(fake_api, IdentityCache(fake_api, save=failing_save))

        with pytest.raises(RootPageNotFoundError) as exc_info:
            publisher.resolve_root('DOCS', 'Root')

        assert exc_info.value.step == PublishStep.ROOT_RESOLUTION
        assert isinstance(exc_info.value.cause, CacheFilesystemError)


class TestPublish:
    """Test cases for publish."""

    def test_new_document_creates_folder_then_page(self, fake_api, publisher, document):
        result = publisher.publish('DOCS', ROOT_ID, 'Root', document)

        assert result is True
        proj_id = fake_api.pages[('DOCS', 'Proj')]['id']
        assert fake_api.calls == [
            ('find_page', 'DOCS', 'Proj'),
            ('create_page', 'DOCS', ROOT_ID, 'Proj'),
            ('find_page', 'DOCS', 'Proj'),
            ('find_page', 'DOCS', 'Design'),
            ('create_page', 'DOCS', proj_id, 'Design'),
        ]
        assert fake_api.pages[('DOCS', 'Design')]['body'] == content_body(document.content)

    def test_existing_document_is_updated_to_next_version(self, fake_api, publisher, document):
        fake_api.add_page('DOCS', 'Proj', 200)
        fake_api.add_page('DOCS', 'Design', 55, version=3)

        result = publisher.publish('DOCS', ROOT_ID, 'Root', document)

        assert result is True
        assert fake_api.calls_named('update_page') == [
            ('update_page', 'DOCS', 200, 55, 4, 'Design'),
        ]
        assert fake_api.calls_named('create_page') == []

    def test_publishing_twice_creates_once_then_updates(self, fake_api, publisher, document):
        publisher.publish('DOCS', ROOT_ID, 'Root', document)
        publisher.publish('DOCS', ROOT_ID, 'Root', document)

        design_creates = [c for c in fake_api.calls_named('create_page') if c[3] == 'Design']
        assert len(design_creates) == 1
        assert len(fake_api.calls_named('update_page')) == 1
        assert fake_api.pages[('DOCS', 'Design')]['version'] == 2

    def test_leaf_lookup_bypasses_stale_cache(self, fake_api, identity_cache, publisher, document):
        fake_api.add_page('DOCS', 'Proj', 200)
        fake_api.add_page('DOCS', 'Design', 55, version=7)
        identity_cache.set('DOCS', 'Design', 1)

        publisher.publish('DOCS', ROOT_ID, 'Root', document)

        assert fake_api.calls_named('update_page') == [
            ('update_page', 'DOCS', 200, 55, 8, 'Design'),
        ]

    def test_found_with_version_zero_is_created(self, fake_api, publisher, document):
        fake_api.add_page('DOCS', 'Proj', 200)
        fake_api.add_page('DOCS', 'Design', 55, version=0)

        publisher.publish('DOCS', ROOT_ID, 'Root', document)

        assert fake_api.calls_named('update_page') == []
        assert len(fake_api.calls_named('create_page')) == 1

    def test_document_outside_root_goes_under_root(self, fake_api, publisher):
        doc = Document(path="Elsewhere/Notes.md", content="x")

        publisher.publish('DOCS', ROOT_ID, 'Root', doc)

        assert fake_api.calls == [
            ('find_page', 'DOCS', 'Notes'),
            ('create_page', 'DOCS', ROOT_ID, 'Notes'),
        ]

    def test_rejected_update_returns_false(self, fake_api, publisher, document):
        fake_api.add_page('DOCS', 'Proj', 200)
        fake_api.add_page('DOCS', 'Design', 55, version=3)
        fake_api.update_result = False

        assert publisher.publish('DOCS', ROOT_ID, 'Root', document) is False

    def test_ancestor_failure_aborts_before_leaf(self, fake_api, publisher, document):
        fake_api.fail_create_for.add('Proj')

        with pytest.raises(AncestorCreationError):
            publisher.publish('DOCS', ROOT_ID, 'Root', document)

        assert ('find_page', 'DOCS', 'Design') not in fake_api.calls

    def test_version_conflict_raises_publish_failed(self, fake_api, publisher, document):
        fake_api.add_page('DOCS', 'Proj', 200)
        fake_api.add_page('DOCS', 'Design', 55, version=3)
        conflict = RemoteCallError('update_page(55)', 409, 'stale')
        fake_api.errors['update_page'] = conflict

        with pytest.raises(PublishFailedError) as exc_info:
            publisher.publish('DOCS', ROOT_ID, 'Root', document)

        assert exc_info.value.step == PublishStep.PUBLISH
        assert exc_info.value.cause is conflict
        assert len(fake_api.calls_named('update_page')) == 1

    def test_cancelled_before_publish_makes_no_calls(self, fake_api, publisher, document):
        token = CancellationToken()
        token.cancel()
        doc = Document(path="Root/Design.md", content="x")

        with pytest.raises(PublishCancelledError) as exc_info:
            publisher.publish('DOCS', ROOT_ID, 'Root', doc, cancel_token=token)

        assert exc_info.value.step == PublishStep.PUBLISH
        assert fake_api.calls == []

    def test_uses_injected_materializer(self, fake_api, identity_cache, document):
        materializer = Mock()
        materializer.ensure_ancestor_chain.return_value = 321
        publisher = Publisher(fake_api, identity_cache, materializer=materializer)

        publisher.publish('DOCS', ROOT_ID, 'Root', document)

        materializer.ensure_ancestor_chain.assert_called_once_with(
            'DOCS', ['Proj'], ROOT_ID, cancel_token=None
        )
        assert fake_api.calls_named('create_page') == [
            ('create_page', 'DOCS', 321, 'Design'),
        ]
