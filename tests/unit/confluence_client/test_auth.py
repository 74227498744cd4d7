"""Unit tests for confluence_client.auth module."""

from unittest.mock import patch

import pytest

from src.confluence_client.auth import Authenticator, Credentials
from src.confluence_client.errors import MissingCredentialsError


class TestAuthenticator:
    """Test cases for Authenticator."""

    @patch('src.confluence_client.auth.load_dotenv')
    def test_get_credentials_success(self, mock_load_dotenv, monkeypatch):
        """All variables present returns Credentials."""
        monkeypatch.setenv('CONFLUENCE_URL', 'https://wiki.example.com/')
        monkeypatch.setenv('CONFLUENCE_COOKIE', 'JSESSIONID=abc')

        creds = Authenticator().get_credentials()

        assert creds == Credentials(url='https://wiki.example.com', cookie='JSESSIONID=abc')
        mock_load_dotenv.assert_called_once()

    @patch('src.confluence_client.auth.load_dotenv')
    def test_missing_cookie_raises(self, mock_load_dotenv, monkeypatch):
        """Missing cookie is reported by variable name."""
        monkeypatch.setenv('CONFLUENCE_URL', 'https://wiki.example.com')
        monkeypatch.delenv('CONFLUENCE_COOKIE', raising=False)

        with pytest.raises(MissingCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert exc_info.value.missing == ['CONFLUENCE_COOKIE']

    @patch('src.confluence_client.auth.load_dotenv')
    def test_blank_values_count_as_missing(self, mock_load_dotenv, monkeypatch):
        """Whitespace-only values are treated as missing."""
        monkeypatch.setenv('CONFLUENCE_URL', '  ')
        monkeypatch.setenv('CONFLUENCE_COOKIE', '')

        with pytest.raises(MissingCredentialsError) as exc_info:
            Authenticator().get_credentials()

        assert exc_info.value.missing == ['CONFLUENCE_URL', 'CONFLUENCE_COOKIE']
        assert 'CONFLUENCE_URL' in str(exc_info.value)
