"""Authentication module for loading Confluence session credentials.

This module loads the Confluence host and a pre-obtained session cookie from
environment variables using python-dotenv. The cookie is attached verbatim to
every request; there is no login or refresh flow.
"""

import os
from typing import NamedTuple

from dotenv import load_dotenv

from .errors import MissingCredentialsError


class Credentials(NamedTuple):
    """Confluence host and session cookie."""
    url: str
    cookie: str


class Authenticator:
    """Loads and validates Confluence credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged to prevent security risks.

    Required environment variables:
        CONFLUENCE_URL: Confluence base URL (e.g., https://wiki.example.com)
        CONFLUENCE_COOKIE: Session cookie copied from a logged-in browser

    Raises:
        MissingCredentialsError: If any required variable is missing

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.url}")
    """

    def __init__(self):
        """Initialize the authenticator by loading environment variables from .env file."""
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get Confluence credentials from environment variables.

        Returns:
            Credentials: A named tuple containing url and cookie

        Raises:
            MissingCredentialsError: If any required variable is missing
        """
        url = (os.getenv('CONFLUENCE_URL') or '').strip()
        cookie = (os.getenv('CONFLUENCE_COOKIE') or '').strip()

        missing = []
        if not url:
            missing.append('CONFLUENCE_URL')
        if not cookie:
            missing.append('CONFLUENCE_COOKIE')

        if missing:
            raise MissingCredentialsError(missing)

        # Trailing slash would produce '//rest/api' paths
        return Credentials(url=url.rstrip('/'), cookie=cookie)
