"""Command-line interface for publishing documents to Confluence.

This package provides the `wiki-publish` CLI tool that publishes local
documents into a Confluence space, creating a parent page for every folder
on the way, with progress indication and error handling.
"""

from .publish_command import PublishCommand
from .models import ExitCode, PublishConfig, PublishSummary
from .errors import (
    CLIError,
    ConfigNotFoundError,
    ConfigFilesystemError,
    DocumentReadError,
)

__all__ = [
    'PublishCommand',
    'ExitCode',
    'PublishConfig',
    'PublishSummary',
    'CLIError',
    'ConfigNotFoundError',
    'ConfigFilesystemError',
    'DocumentReadError',
]
