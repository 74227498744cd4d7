"""API wrapper for the Confluence content REST API.

This module wraps the atlassian-python-api Confluence client and exposes the
three operations the publisher needs: look up a page by space and title,
create a page under an ancestor, and update a page to the next version.
Non-2xx responses and transport failures are translated into the typed
exception hierarchy; nothing is retried.
"""

import logging
import re
from typing import Any, Dict, Optional

import requests
from atlassian import Confluence
from requests.exceptions import ConnectionError, Timeout

from src.models.page_lookup import PageFound, PageLookup, PageNotFound

from .auth import Authenticator
from .errors import (
    APIUnreachableError,
    RemoteCallError,
    RemoteTimeoutError,
    UnexpectedResponseError,
)

logger = logging.getLogger(__name__)

USER_AGENT = "wiki-publish/0.1.0"

CONTENT_PATH = "rest/api/content"
LOOKUP_EXPAND = "space,body.view,version,container"

# Cookie-authenticated writes are rejected by Confluence's XSRF check
# unless X-Atlassian-Token is set.
WRITE_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "User-Agent": USER_AGENT,
    "X-Content-Type-Options": "nosniff",
    "X-Atlassian-Token": "no-check",
}


class APIWrapper:
    """Wrapper around atlassian-python-api Confluence client with error translation.

    This class provides a thin wrapper over the Confluence API client that:
    1. Authenticates every request with a session cookie
    2. Bounds every request with a timeout
    3. Translates HTTP errors to typed exceptions
    4. Decodes lookup responses once into PageFound / PageNotFound

    Example:
        >>> auth = Authenticator()
        >>> api = APIWrapper(auth)
        >>> lookup = api.find_page("DOCS", "Design")
    """

    def __init__(self, authenticator: Authenticator, timeout: float = 30):
        """Initialize the API wrapper with authentication credentials.

        Args:
            authenticator: Authenticator instance for loading credentials
            timeout: Seconds to wait for each remote call before giving up
        """
        self._authenticator = authenticator
        self._timeout = timeout
        self._client: Optional[Confluence] = None

    def _get_client(self) -> Confluence:
        """Get or create the Confluence API client.

        This method lazily initializes the Confluence client on first use.
        The session carries the cookie so that it is sent on every request.

        Returns:
            Confluence: Initialized atlassian-python-api Confluence client

        Raises:
            MissingCredentialsError: If credentials are missing
        """
        if self._client is None:
            creds = self._authenticator.get_credentials()
            session = requests.Session()
            session.headers.update({
                "Cookie": creds.cookie,
                "Accept": "application/json",
            })
            self._client = Confluence(
                url=creds.url,
                session=session,
                timeout=self._timeout,
            )
        return self._client

    def _validate_page_id(self, page_id: int) -> None:
        """Validate that a page ID is a positive integer.

        Page IDs are interpolated into request paths, so anything that is
        not a plain positive integer is rejected.

        Args:
            page_id: The page ID to validate

        Raises:
            ValueError: If page_id is not a positive integer
        """
        if isinstance(page_id, bool) or not isinstance(page_id, int) or page_id <= 0:
            raise ValueError(
                f"Invalid page_id: '{page_id}'. Page IDs must be positive integers."
            )

    def _sanitize_cookie(self, text: str) -> str:
        """Mask the session cookie in text that is about to be logged.

        Args:
            text: Log text that may contain the cookie

        Returns:
            str: Text with the cookie value masked
        """
        if not text:
            return text

        sanitized = re.sub(
            r'(Cookie["\']?\s*[:=]\s*["\']?)[^"\'\n\r]+',
            r'\1***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'\b(JSESSIONID|seraph\.[\w.]+|cloud\.session\.token|tenant\.session\.token)=[^;\s"\']+',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        return sanitized

    def _translate_error(self, exception: Exception, operation: str) -> Exception:
        """Translate transport exceptions to typed Confluence exceptions.

        Args:
            exception: The original exception raised by requests
            operation: Description of the operation that failed

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        # Timeout first: ConnectTimeout is also a ConnectionError
        if isinstance(exception, Timeout):
            return RemoteTimeoutError(operation=operation, timeout=self._timeout)

        if isinstance(exception, ConnectionError):
            creds = self._authenticator.get_credentials()
            return APIUnreachableError(endpoint=creds.url)

        return exception

    def _check_status(self, response: requests.Response, operation: str) -> None:
        """Raise RemoteCallError for any non-2xx response."""
        logger.debug(
            f"<<< {operation}: HTTP {response.status_code} "
            f"{self._sanitize_cookie(response.text or '')[:2000]}"
        )
        if not 200 <= response.status_code < 300:
            body = self._sanitize_cookie(response.text or "")
            logger.error(f"API operation failed: {operation} - HTTP {response.status_code}")
            raise RemoteCallError(
                operation=operation,
                status_code=response.status_code,
                body=body,
            )

    def _build_payload(
        self,
        space: str,
        ancestor_id: int,
        title: str,
        body: str,
    ) -> Dict[str, Any]:
        return {
            "type": "page",
            "status": "current",
            "title": title,
            "space": {"key": space},
            "ancestors": [{"id": ancestor_id}],
            "body": {
                "storage": {
                    "value": body,
                    "representation": "storage",
                }
            },
        }

    def find_page(self, space: str, title: str) -> PageLookup:
        """Look up a page by space and exact title.

        Args:
            space: The space key
            title: The page title

        Returns:
            PageFound with id and current version for the first match,
            or PageNotFound if the space has no page with this title

        Raises:
            RemoteCallError: If Confluence answers with a non-2xx status
            RemoteTimeoutError: If the request exceeds the timeout
            APIUnreachableError: If the host cannot be reached
            UnexpectedResponseError: If the response cannot be decoded
        """
        operation = f"find_page({space}, {title})"
        params = {
            "spaceKey": space,
            "title": title,
            "expand": LOOKUP_EXPAND,
        }
        logger.debug(f">>> GET /{CONTENT_PATH} {params}")

        try:
            client = self._get_client()
            response = client.get(CONTENT_PATH, params=params, advanced_mode=True)
        except (Timeout, ConnectionError) as e:
            raise self._translate_error(e, operation) from e

        self._check_status(response, operation)
        if response.status_code != 200:
            logger.warning(f"{operation} returned HTTP {response.status_code}, treating as not found")
            return PageNotFound(space_key=space, title=title)

        try:
            data = response.json()
        except ValueError as e:
            raise UnexpectedResponseError(operation, "body is not JSON") from e

        if not isinstance(data, dict):
            raise UnexpectedResponseError(operation, "body is not a JSON object")

        results = data.get("results") or []
        if not data.get("size") or not results:
            return PageNotFound(space_key=space, title=title)

        return self._decode_page(results[0], operation)

    def _decode_page(self, result: Dict[str, Any], operation: str) -> PageFound:
        """Decode the first lookup result into a PageFound record."""
        try:
            page_id = int(result.get("id"))
        except (TypeError, ValueError) as e:
            raise UnexpectedResponseError(
                operation, f"invalid page id {result.get('id')!r}"
            ) from e
        if page_id <= 0:
            raise UnexpectedResponseError(operation, f"invalid page id {page_id}")

        version_info = result.get("version") or {}
        try:
            version = int(version_info.get("number") or 0)
        except (TypeError, ValueError) as e:
            raise UnexpectedResponseError(
                operation, f"invalid version {version_info.get('number')!r}"
            ) from e

        return PageFound(
            page_id=page_id,
            version=version,
            title=result.get("title", ""),
        )

    def create_page(
        self,
        space: str,
        ancestor_id: int,
        title: str,
        body: str,
    ) -> bool:
        """Create a new current page under an ancestor.

        Args:
            space: The space key where the page will be created
            ancestor_id: ID of the parent page
            title: The page title
            body: The page content in storage format

        Returns:
            True if Confluence answered HTTP 200, False for any other 2xx

        Raises:
            RemoteCallError: If Confluence answers with a non-2xx status
            RemoteTimeoutError: If the request exceeds the timeout
            APIUnreachableError: If the host cannot be reached
        """
        self._validate_page_id(ancestor_id)
        operation = f"create_page({space}, {title})"
        payload = self._build_payload(space, ancestor_id, title, body)
        logger.debug(f">>> POST /{CONTENT_PATH} title={title!r} ancestor={ancestor_id}")

        try:
            client = self._get_client()
            response = client.post(
                CONTENT_PATH,
                data=payload,
                headers=WRITE_HEADERS,
                advanced_mode=True,
            )
        except (Timeout, ConnectionError) as e:
            raise self._translate_error(e, operation) from e

        self._check_status(response, operation)
        return response.status_code == 200

    def update_page(
        self,
        space: str,
        ancestor_id: int,
        page_id: int,
        expected_version: int,
        title: str,
        body: str,
    ) -> bool:
        """Update a page, submitting ``expected_version + 1``.

        Confluence rejects the update with 409 if the page has moved past
        ``expected_version`` in the meantime.

        Args:
            space: The space key
            ancestor_id: ID of the parent page
            page_id: The Confluence page ID
            expected_version: The version the caller believes is current
            title: The page title
            body: The page content in storage format

        Returns:
            True if Confluence answered HTTP 200, False for any other 2xx

        Raises:
            RemoteCallError: If Confluence answers with a non-2xx status
                (``is_version_conflict`` is set for 409)
            RemoteTimeoutError: If the request exceeds the timeout
            APIUnreachableError: If the host cannot be reached
        """
        self._validate_page_id(ancestor_id)
        self._validate_page_id(page_id)
        operation = f"update_page({page_id})"
        payload = self._build_payload(space, ancestor_id, title, body)
        payload["version"] = {"number": expected_version + 1}
        logger.debug(
            f">>> PUT /{CONTENT_PATH}/{page_id} title={title!r} "
            f"ancestor={ancestor_id} version={expected_version + 1}"
        )

        try:
            client = self._get_client()
            response = client.put(
                f"{CONTENT_PATH}/{page_id}",
                data=payload,
                headers=WRITE_HEADERS,
                advanced_mode=True,
            )
        except (Timeout, ConnectionError) as e:
            raise self._translate_error(e, operation) from e

        self._check_status(response, operation)
        return response.status_code == 200
