"""Main CLI entry point for wiki-publish command.

This module provides the Typer application that serves as the entry point
for the wiki-publish command-line tool. It uses options on the main command
rather than subcommands for a simpler user experience.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from src.cli.config import ConfigLoader
from src.cli.errors import CLIError
from src.cli.models import ExitCode, PublishConfig
from src.cli.output import OutputHandler
from src.cli.publish_command import PublishCommand
from src.publisher.errors import ConfigError

VERSION = "0.1.0"

app = typer.Typer(
    name="wiki-publish",
    help="""Publish local documents to Confluence, mirroring folders as parent pages.

QUICK START:
  wiki-publish --init --space <KEY> --root-title <TITLE> --root-folder <FOLDER>
  wiki-publish <FOLDER>/Proj/Design.md                         # Publish one document

Credentials are read from CONFLUENCE_URL and CONFLUENCE_COOKIE (environment or .env).""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

GETTING_STARTED_MESSAGE = """wiki-publish <file> [<file> ...]                                    # Publish documents

--init --space <KEY> --root-title <TITLE> --root-folder <FOLDER>   # Initialize
--forget <TITLE>                                                    # Drop a cached page ID
--clear-cache                                                       # Drop all cached page IDs
--help                                                              # Show all options

Example:
  wiki-publish --init --space DOCS --root-title "Knowledge Base" --root-folder "./Knowledge Base"
  wiki-publish "Knowledge Base/Proj/Design.md"

Credentials: set CONFLUENCE_URL and CONFLUENCE_COOKIE in the environment or a .env file."""


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"wiki-publish_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _run_init(
    config_path: str,
    space_key: str,
    root_title: str,
    root_folder: str,
    timeout: float,
    verbosity: int,
    no_color: bool,
) -> None:
    """Write a new configuration file.

    Args:
        config_path: Where to write the configuration
        space_key: Confluence space key
        root_title: Title of the existing root page
        root_folder: Local folder mirrored under the root page
        timeout: Seconds to wait for each Confluence request
        verbosity: Verbosity level
        no_color: Whether to disable colored output
    """
    _configure_logging(verbosity)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    config = PublishConfig(
        space_key=space_key.strip(),
        root_page_title=root_title.strip(),
        root_folder_path=root_folder.strip(),
        request_timeout=timeout,
    )

    try:
        ConfigLoader.validate(config)
        ConfigLoader.save(config_path, config)
    except (ConfigError, CLIError) as e:
        logger.error(f"Initialization failed: {e}")
        output.error(f"Initialization failed: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output.success("Configuration initialized successfully")
    output.info(f"  Config file: {config_path}")
    output.info(f"  Space: {config.space_key}")
    output.info(f"  Root page: {config.root_page_title}")
    output.info(f"  Root folder: {config.root_folder_path}")
    raise typer.Exit(ExitCode.SUCCESS)


def _run_publish(
    config_path: str,
    files: List[str],
    forget: Optional[List[str]],
    clear_cache: bool,
    logdir: Optional[str],
    verbosity: int,
    no_color: bool,
) -> None:
    """Run publish command."""
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    publish_cmd = PublishCommand(config_path=config_path, output_handler=output)
    exit_code = publish_cmd.run(
        files=files,
        forget=forget,
        clear_cache=clear_cache,
    )

    raise typer.Exit(exit_code)


@app.command()
def main_command(
    files: Optional[List[str]] = typer.Argument(
        None,
        help="Document file(s) to publish",
    ),
    config_path: str = typer.Option(
        ConfigLoader.DEFAULT_CONFIG_PATH,
        "--config",
        help="Path to the configuration file",
        metavar="PATH",
    ),
    init: bool = typer.Option(
        False,
        "--init",
        help="Initialize configuration (requires --space, --root-title and --root-folder)",
    ),
    space_key: Optional[str] = typer.Option(
        None,
        "--space",
        help="Confluence space key (used with --init)",
        metavar="KEY",
    ),
    root_title: Optional[str] = typer.Option(
        None,
        "--root-title",
        help="Title of the root page to publish under (used with --init)",
        metavar="TITLE",
    ),
    root_folder: Optional[str] = typer.Option(
        None,
        "--root-folder",
        help="Local folder mirrored under the root page (used with --init)",
        metavar="FOLDER",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each Confluence request (used with --init)",
    ),
    forget: Optional[List[str]] = typer.Option(
        None,
        "--forget",
        help="Drop the cached page ID for a title (can be used multiple times)",
        metavar="TITLE",
    ),
    clear_cache: bool = typer.Option(
        False,
        "--clear-cache",
        help="Drop all cached page IDs",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Publish local documents to Confluence, mirroring folders as parent pages.

    \b
    QUICK START:
      wiki-publish --init --space DOCS --root-title "Knowledge Base" --root-folder "./Knowledge Base"
      wiki-publish "Knowledge Base/Proj/Design.md"

    \b
    NOTE:
      - Folder pages are created on demand under the root page
      - Re-publishing a document updates its page to the next version
    """
    if version:
        typer.echo(f"wiki-publish version {VERSION}")
        raise typer.Exit()

    init_options = (space_key, root_title, root_folder, timeout)
    if init or any(option is not None for option in init_options):
        missing = []
        if not init:
            missing.append("--init")
        if space_key is None:
            missing.append("--space")
        if root_title is None:
            missing.append("--root-title")
        if root_folder is None:
            missing.append("--root-folder")

        if missing:
            typer.echo(f"Error: Missing required option(s): {', '.join(missing)}", err=True)
            typer.echo("")
            typer.echo("Example:")
            typer.echo('  wiki-publish --init --space DOCS --root-title "Knowledge Base" --root-folder "./Knowledge Base"')
            raise typer.Exit(ExitCode.GENERAL_ERROR)

        if timeout is None:
            timeout = ConfigLoader.DEFAULTS["request_timeout"]
        _run_init(config_path, space_key, root_title, root_folder, timeout, verbosity, no_color)
        return

    if not files and not forget and not clear_cache:
        typer.echo(GETTING_STARTED_MESSAGE)
        raise typer.Exit()

    _run_publish(config_path, files or [], forget, clear_cache, logdir, verbosity, no_color)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
