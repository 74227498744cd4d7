"""Publish command orchestration for CLI.

This module provides the PublishCommand class that wires configuration,
credentials, the page ID cache and the Publisher together, publishes each
requested document, and reports exactly one outcome line per document.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from src.cli.config import ConfigLoader
from src.cli.errors import CLIError, DocumentReadError
from src.cli.models import ExitCode, PublishConfig, PublishSummary
from src.cli.output import OutputHandler
from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.auth import Authenticator
from src.confluence_client.errors import (
    APIUnreachableError,
    MissingCredentialsError,
    RemoteCallError,
    RemoteTimeoutError,
)
from src.models.document import Document
from src.publisher.cache_store import CacheMapping, CacheStore
from src.publisher.cancellation import CancellationToken
from src.publisher.errors import (
    CacheError,
    ConfigError,
    PublisherError,
    PublishError,
)
from src.publisher.identity_cache import IdentityCache
from src.publisher.publisher import Publisher

logger = logging.getLogger(__name__)


class PublishCommand:
    """Orchestrates publishing local documents for the CLI.

    The publish workflow:
        1. Load and validate configuration (no remote call on failure)
        2. Load credentials and the page ID cache
        3. For each document:
           - Resolve the root page (cached after the first lookup)
           - Publish the document under its folder pages
           - Report one success or failure line naming the failed step
        4. Return an exit code reflecting the first failure

    Example:
        >>> output = OutputHandler(verbosity=1)
        >>> cmd = PublishCommand(output_handler=output)
        >>> exit_code = cmd.run(["Knowledge Base/Proj/Design.md"])
        >>> sys.exit(exit_code)
    """

    def __init__(
        self,
        config_path: str = ConfigLoader.DEFAULT_CONFIG_PATH,
        output_handler: Optional[OutputHandler] = None,
        authenticator: Optional[Authenticator] = None,
        api: Optional[APIWrapper] = None,
        identity_cache: Optional[IdentityCache] = None,
        publisher: Optional[Publisher] = None,
        cancel_token: Optional[CancellationToken] = None,
    ):
        """Initialize publish command with dependencies.

        Args:
            config_path: Path to configuration YAML file
            output_handler: OutputHandler for terminal output (optional)
            authenticator: Authenticator for Confluence credentials (optional)
            api: APIWrapper for Confluence calls (optional)
            identity_cache: IdentityCache for page IDs (optional)
            publisher: Publisher for documents (optional)
            cancel_token: CancellationToken shared by all publishes (optional)

        Note:
            All dependencies are optional to support testing. In production
            they are created from the configuration in run().
        """
        self.config_path = config_path
        self.output_handler = output_handler or OutputHandler()
        self.authenticator = authenticator
        self.api = api
        self.identity_cache = identity_cache
        self.publisher = publisher
        self.cancel_token = cancel_token or CancellationToken()

    def cancel(self) -> None:
        """Stop before the next remote step; remaining documents are skipped."""
        self.cancel_token.cancel()

    def run(
        self,
        files: List[str],
        forget: Optional[List[str]] = None,
        clear_cache: bool = False,
    ) -> ExitCode:
        """Publish the given documents.

        Args:
            files: Document paths, as given or relative to root_folder_path
            forget: Titles to drop from the page ID cache before publishing
            clear_cache: Drop the whole page ID cache before publishing

        Returns:
            ExitCode of the first failure, or SUCCESS
        """
        try:
            config = ConfigLoader.load(self.config_path)
        except (CLIError, ConfigError) as e:
            logger.error(f"Configuration failed: {e}")
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        try:
            self._setup(config)
        except MissingCredentialsError as e:
            logger.error(str(e))
            self.output_handler.error(f"{e}. Set them in the environment or a .env file.")
            return ExitCode.AUTH_ERROR
        except PublisherError as e:
            logger.error(str(e))
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        try:
            self._update_cache(config, forget or [], clear_cache)
        except PublisherError as e:
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        if not files:
            if forget or clear_cache:
                return ExitCode.SUCCESS
            self.output_handler.error("No documents to publish")
            return ExitCode.GENERAL_ERROR

        summary = PublishSummary()
        exit_code = ExitCode.SUCCESS

        for file_arg in files:
            if self.cancel_token.cancelled:
                self.output_handler.warning(f"Skipped \"{file_arg}\" (cancelled)")
                summary.failed.append(file_arg)
                if exit_code == ExitCode.SUCCESS:
                    exit_code = ExitCode.GENERAL_ERROR
                continue

            try:
                code = self._publish_file(config, file_arg)
            except KeyboardInterrupt:
                self.cancel()
                self.output_handler.warning(f"Interrupted while publishing \"{file_arg}\"")
                code = ExitCode.GENERAL_ERROR

            if code == ExitCode.SUCCESS:
                summary.published.append(file_arg)
            else:
                summary.failed.append(file_arg)
                if exit_code == ExitCode.SUCCESS:
                    exit_code = code

        self.output_handler.print_summary(summary)
        return exit_code

    def _setup(self, config: PublishConfig) -> None:
        """Create whatever dependencies were not injected."""
        if self.authenticator is None:
            self.authenticator = Authenticator()
        # Fail on missing credentials before any remote call
        self.authenticator.get_credentials()

        if self.api is None:
            self.api = APIWrapper(self.authenticator, timeout=config.request_timeout)

        if self.identity_cache is None:
            cache_path = config.cache_path
            self.identity_cache = IdentityCache(
                self.api,
                load=lambda: self._load_cache(cache_path),
                save=lambda mapping: CacheStore.save(cache_path, mapping),
            )

        if self.publisher is None:
            self.publisher = Publisher(self.api, self.identity_cache)

    def _load_cache(self, cache_path: str) -> CacheMapping:
        """Load the page ID cache, starting empty if the file is malformed.

        Every entry can be looked up again in Confluence; the next save
        replaces the malformed file.
        """
        try:
            return CacheStore.load(cache_path)
        except CacheError as e:
            logger.warning(f"Ignoring page ID cache {cache_path}: {e}")
            self.output_handler.warning(
                f"Ignoring unreadable page ID cache {cache_path}; page IDs will be looked up again"
            )
            return {}

    def _update_cache(self, config: PublishConfig, forget: List[str], clear_cache: bool) -> None:
        if clear_cache:
            self.identity_cache.clear()
            self.output_handler.success("Cleared page ID cache")

        for title in forget:
            if self.identity_cache.forget(config.space_key, title):
                self.output_handler.success(f"Forgot cached page ID for '{title}'")
            else:
                self.output_handler.warning(f"No cached page ID for '{title}'")

    def _publish_file(self, config: PublishConfig, file_arg: str) -> ExitCode:
        try:
            document = self._read_document(config, file_arg)
        except DocumentReadError as e:
            self.output_handler.error(str(e))
            return ExitCode.GENERAL_ERROR

        try:
            with self.output_handler.spinner(f"Publishing {document.path}..."):
                root_page_id = self.publisher.resolve_root(
                    config.space_key,
                    config.root_page_title,
                    cancel_token=self.cancel_token,
                )
                published = self.publisher.publish(
                    config.space_key,
                    root_page_id,
                    config.root_page_title,
                    document,
                    cancel_token=self.cancel_token,
                )
        except PublishError as e:
            logger.error(f"Publish of {document.path} failed at {e.step.value}: {e}")
            self.output_handler.error(
                f"Failed to publish \"{document.path}\" ({e.step.value}): {e}"
            )
            return self._exit_code_for(e)
        except PublisherError as e:
            logger.error(f"Publish of {document.path} failed: {e}")
            self.output_handler.error(f"Failed to publish \"{document.path}\": {e}")
            return ExitCode.GENERAL_ERROR

        if published:
            self.output_handler.success(f"Successfully published \"{document.path}\" to Confluence.")
            return ExitCode.SUCCESS

        self.output_handler.error(f"Failed to publish \"{document.path}\" to Confluence.")
        return ExitCode.GENERAL_ERROR

    def _read_document(self, config: PublishConfig, file_arg: str) -> Document:
        """Read a document and work out its path relative to the root folder's parent.

        Keeping the root folder's own name in the path lets the root page
        title anchor the hierarchy when the folder is named after it.
        """
        file_path = Path(file_arg)
        if not file_path.is_absolute() and not file_path.exists():
            candidate = Path(config.root_folder_path) / file_path
            if candidate.exists():
                file_path = candidate

        try:
            content = file_path.read_text(encoding='utf-8')
        except FileNotFoundError:
            raise DocumentReadError(str(file_path), "file not found")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentReadError(str(file_path), str(e))

        root_parent = Path(os.path.abspath(config.root_folder_path)).parent
        try:
            doc_path = Path(os.path.abspath(file_path)).relative_to(root_parent).as_posix()
        except ValueError:
            doc_path = file_path.as_posix()

        return Document(path=doc_path, content=content)

    def _exit_code_for(self, error: PublishError) -> ExitCode:
        cause = error.cause
        if isinstance(cause, RemoteCallError):
            if cause.is_version_conflict:
                return ExitCode.CONFLICTS
            if cause.is_auth_failure:
                return ExitCode.AUTH_ERROR
        if isinstance(cause, (RemoteTimeoutError, APIUnreachableError)):
            return ExitCode.NETWORK_ERROR
        return ExitCode.GENERAL_ERROR
