"""Pytest configuration and fixtures for integration tests.

Runs the real Authenticator, APIWrapper, IdentityCache and Publisher against
an in-memory stand-in for the Confluence content REST API, patched in where
the atlassian-python-api client is created.
"""

import json
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import Mock, patch

import pytest
import yaml


def make_response(status_code: int, payload: Optional[Dict[str, Any]] = None, text: str = "") -> Mock:
    """Create a mock requests.Response as returned with advanced_mode=True."""
    response = Mock()
    response.status_code = status_code
    if payload is not None:
        response.json.return_value = payload
        response.text = json.dumps(payload)
    else:
        response.json.side_effect = ValueError("No JSON")
        response.text = text
    return response


class FakeConfluenceServer:
    """Pages held in memory, keyed by (space key, title).

    Mirrors the behaviour the publisher relies on: duplicate titles in a
    space are rejected with 400, and an update must carry exactly the
    current version + 1 or it is rejected with 409.
    """

    def __init__(self):
        self.pages: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self.requests: List[Tuple[str, str]] = []
        self.fail_with: Optional[int] = None
        self._next_id = 1000

    def add_page(self, space: str, title: str, ancestor_id: Optional[int] = None,
                 version: int = 1, body: str = "") -> int:
        self._next_id += 1
        self.pages[(space, title)] = {
            'id': self._next_id,
            'title': title,
            'version': version,
            'ancestor_id': ancestor_id,
            'body': body,
        }
        return self._next_id

    def page(self, space: str, title: str) -> Dict[str, Any]:
        return self.pages[(space, title)]

    def count(self, method: str) -> int:
        return sum(1 for m, _ in self.requests if m == method)

    def get(self, path, params=None, advanced_mode=False):
        self.requests.append(('GET', path))
        if self.fail_with:
            return make_response(self.fail_with, text='Unauthorized')
        page = self.pages.get((params['spaceKey'], params['title']))
        results = []
        if page:
            results.append({
                'id': str(page['id']),
                'title': page['title'],
                'version': {'number': page['version']},
            })
        return make_response(200, {'size': len(results), 'results': results})

    def post(self, path, data=None, headers=None, advanced_mode=False):
        self.requests.append(('POST', path))
        key = (data['space']['key'], data['title'])
        if key in self.pages:
            return make_response(400, text='A page with this title already exists')
        page_id = self.add_page(
            key[0], key[1],
            ancestor_id=data['ancestors'][0]['id'],
            body=data['body']['storage']['value'],
        )
        return make_response(200, {'id': str(page_id)})

    def put(self, path, data=None, headers=None, advanced_mode=False):
        self.requests.append(('PUT', path))
        page_id = int(path.rsplit('/', 1)[1])
        page = next(p for p in self.pages.values() if p['id'] == page_id)
        if data['version']['number'] != page['version'] + 1:
            return make_response(409, text='Version must be incremented on update')
        page.update(
            version=data['version']['number'],
            ancestor_id=data['ancestors'][0]['id'],
            body=data['body']['storage']['value'],
        )
        return make_response(200, {'id': str(page_id)})


@pytest.fixture
def confluence_server():
    """Patch the Confluence client with a fresh in-memory server."""
    server = FakeConfluenceServer()
    with patch('src.confluence_client.api_wrapper.Confluence', return_value=server):
        yield server


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Working directory with credentials, a config file and a document tree."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv('CONFLUENCE_URL', 'https://wiki.example.com/')
    monkeypatch.setenv('CONFLUENCE_COOKIE', 'JSESSIONID=abc123')

    root = tmp_path / "Root"
    (root / "Proj" / "Specs").mkdir(parents=True)
    (root / "Proj" / "Specs" / "Design.md").write_text("# Design\n\nFirst draft", encoding="utf-8")

    config_dir = tmp_path / ".wiki-publish"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text(yaml.safe_dump({
        'space_key': 'DOCS',
        'root_page_title': 'Root',
        'root_folder_path': str(root),
    }))
    return tmp_path
