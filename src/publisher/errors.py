"""Typed exception hierarchy for publisher errors.

This module defines all custom exceptions used by the publisher library.
All exceptions inherit from PublisherError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from enum import Enum
from typing import Optional

from src.confluence_client.errors import SyncError


class PublishStep(str, Enum):
    """Step of a publish that a failure is attributed to."""
    ROOT_RESOLUTION = "root resolution"
    ANCESTOR_CREATION = "ancestor page creation"
    PUBLISH = "final publish"


class PublisherError(SyncError):
    """Base exception for all publisher errors."""
    pass


class ConfigError(PublisherError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class CacheError(PublisherError):
    """Raised when the page ID cache file is malformed."""

    def __init__(self, message: str):
        super().__init__(f"Page ID cache error: {message}")
        self.original_message = message


class CacheFilesystemError(PublisherError):
    """Raised when the page ID cache file cannot be read or written."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Cache file operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class PublishError(PublisherError):
    """Base exception for a failed publish, tagged with the step that failed."""

    step: PublishStep = PublishStep.PUBLISH

    @property
    def cause(self) -> Optional[BaseException]:
        """The remote error that triggered this failure, if any."""
        return self.__cause__


class RootPageNotFoundError(PublishError):
    """Raised when the configured root page does not exist in the space."""

    step = PublishStep.ROOT_RESOLUTION

    def __init__(self, space_key: str, title: str):
        super().__init__(f"Root page '{title}' not found in space {space_key}")
        self.space_key = space_key
        self.title = title


class AncestorCreationError(PublishError):
    """Raised when a folder page cannot be resolved or created.

    The rest of the ancestor chain is abandoned; pages created before the
    failure stay in place.
    """

    step = PublishStep.ANCESTOR_CREATION

    def __init__(self, folder: str, parent_id: int, reason: Optional[str] = None):
        message = f"Failed to create parent page '{folder}' under page {parent_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.folder = folder
        self.parent_id = parent_id
        self.reason = reason


class PublishFailedError(PublishError):
    """Raised when the final create or update of a document fails remotely."""

    step = PublishStep.PUBLISH

    def __init__(self, title: str, reason: Optional[str] = None):
        message = f"Failed to publish '{title}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.title = title
        self.reason = reason


class PublishCancelledError(PublishError):
    """Raised when a publish is cancelled before a remote step."""

    def __init__(self, step: PublishStep):
        super().__init__(f"Publish cancelled before {step.value}")
        self.step = step
