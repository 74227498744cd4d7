"""Configuration file loading and validation.

This module handles loading and saving the project configuration from a YAML
file. All of space_key, root_page_title and root_folder_path must be set
before anything is sent to Confluence.
"""

import os
from typing import Any, Dict

import yaml

from src.publisher.errors import ConfigError

from .errors import ConfigFilesystemError, ConfigNotFoundError
from .models import PublishConfig


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        space_key: "DOCS"
        root_page_title: "Knowledge Base"
        root_folder_path: "./Knowledge Base"
        cache_path: ".wiki-publish/page_ids.yaml"
        request_timeout: 30
    """

    DEFAULT_CONFIG_DIR = '.wiki-publish'
    DEFAULT_CONFIG_FILE = 'config.yaml'
    DEFAULT_CONFIG_PATH = f'{DEFAULT_CONFIG_DIR}/{DEFAULT_CONFIG_FILE}'

    REQUIRED_FIELDS = ('space_key', 'root_page_title', 'root_folder_path')

    DEFAULTS = {
        'cache_path': f'{DEFAULT_CONFIG_DIR}/page_ids.yaml',
        'request_timeout': 30.0,
    }

    @classmethod
    def load(cls, config_path: str) -> PublishConfig:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            PublishConfig object with parsed configuration

        Raises:
            ConfigNotFoundError: If the file does not exist
            ConfigFilesystemError: If the file cannot be read
            ConfigError: If configuration is invalid or a required field is empty
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigNotFoundError(config_path)
        except PermissionError:
            raise ConfigFilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise ConfigFilesystemError(config_path, 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(
                f"Invalid YAML syntax: {str(e)}"
            )

        if config_dict is None:
            raise ConfigError("Configuration file is empty")

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        config = cls._parse_config(config_dict)
        cls.validate(config)
        return config

    @classmethod
    def save(cls, config_path: str, config: PublishConfig) -> None:
        """Save configuration to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            config: PublishConfig object to save

        Raises:
            ConfigFilesystemError: If file cannot be written
        """
        config_dict = {
            'space_key': config.space_key,
            'root_page_title': config.root_page_title,
            'root_folder_path': config.root_folder_path,
            'cache_path': config.cache_path,
            'request_timeout': config.request_timeout,
        }

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise ConfigFilesystemError(config_dir, 'create_directory', str(e))

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise ConfigFilesystemError(config_path, 'write', 'Permission denied')
        except OSError as e:
            raise ConfigFilesystemError(config_path, 'write', str(e))

    @classmethod
    def validate(cls, config: PublishConfig) -> None:
        """Check that every required setting is a non-empty string.

        Raises:
            ConfigError: Naming the first empty field
        """
        for field_name in cls.REQUIRED_FIELDS:
            value = getattr(config, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(
                    f"Field '{field_name}' must be set",
                    field_name
                )

        if config.request_timeout <= 0:
            raise ConfigError(
                "Field 'request_timeout' must be positive",
                'request_timeout'
            )

    @classmethod
    def _parse_config(cls, config_dict: Dict[str, Any]) -> PublishConfig:
        for field_name in cls.REQUIRED_FIELDS:
            value = config_dict.get(field_name)
            if value is not None and not isinstance(value, str):
                raise ConfigError(
                    f"Field '{field_name}' must be a string, got {type(value).__name__}",
                    field_name
                )

        cache_path = config_dict.get('cache_path', cls.DEFAULTS['cache_path'])
        if not isinstance(cache_path, str) or not cache_path.strip():
            raise ConfigError(
                "Field 'cache_path' must be a non-empty string",
                'cache_path'
            )

        request_timeout = config_dict.get('request_timeout', cls.DEFAULTS['request_timeout'])
        if isinstance(request_timeout, bool) or not isinstance(request_timeout, (int, float)):
            raise ConfigError(
                f"Field 'request_timeout' must be a number, got {type(request_timeout).__name__}",
                'request_timeout'
            )

        return PublishConfig(
            space_key=(config_dict.get('space_key') or '').strip(),
            root_page_title=(config_dict.get('root_page_title') or '').strip(),
            root_folder_path=(config_dict.get('root_folder_path') or '').strip(),
            cache_path=cache_path,
            request_timeout=float(request_timeout),
        )
