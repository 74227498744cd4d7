"""Page ID cache file loading and saving.

The cache file maps page titles to Confluence page IDs, grouped by space key:

    DOCS:
      Knowledge Base: 109283151
      Proj: 109283160

A missing or empty file is a fresh, empty cache.
"""

import os
import tempfile
from typing import Any, Dict

import yaml

from .errors import CacheError, CacheFilesystemError

CacheMapping = Dict[str, Dict[str, int]]


class CacheStore:
    """Handles page ID cache file loading, validation, and saving."""

    DEFAULT_CACHE_PATH = '.wiki-publish/page_ids.yaml'

    @classmethod
    def load(cls, cache_path: str) -> CacheMapping:
        """Load the page ID mapping from a YAML file.

        Args:
            cache_path: Path to the YAML cache file

        Returns:
            Mapping of space key to {title: page_id}

        Raises:
            CacheFilesystemError: If the file exists but cannot be read
            CacheError: If the file is not a valid cache
        """
        try:
            with open(cache_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return {}
        except PermissionError:
            raise CacheFilesystemError(cache_path, 'read', 'Permission denied')
        except OSError as e:
            raise CacheFilesystemError(cache_path, 'read', str(e))

        if not content.strip():
            return {}

        try:
            raw = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise CacheError(f"Invalid YAML syntax: {str(e)}")

        if raw is None:
            return {}

        return cls._parse_mapping(raw)

    @classmethod
    def save(cls, cache_path: str, mapping: CacheMapping) -> None:
        """Write the page ID mapping to a YAML file.

        Args:
            cache_path: Path to the YAML cache file
            mapping: Mapping of space key to {title: page_id}

        Raises:
            CacheFilesystemError: If the file cannot be written
        """
        yaml_str = yaml.safe_dump(
            {space: dict(titles) for space, titles in mapping.items()},
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=True
        )

        cache_dir = os.path.dirname(cache_path)
        if cache_dir:
            try:
                os.makedirs(cache_dir, exist_ok=True)
            except OSError as e:
                raise CacheFilesystemError(cache_dir, 'create_directory', str(e))

        # The previous file stays intact until the new one is complete
        temp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                mode='w',
                dir=cache_dir or '.',
                prefix='.page_ids.',
                suffix='.tmp',
                delete=False,
                encoding='utf-8',
            ) as f:
                temp_path = f.name
                f.write(yaml_str)
            os.replace(temp_path, cache_path)
        except PermissionError:
            cls._remove_temp(temp_path)
            raise CacheFilesystemError(cache_path, 'write', 'Permission denied')
        except OSError as e:
            cls._remove_temp(temp_path)
            raise CacheFilesystemError(cache_path, 'write', str(e))

    @staticmethod
    def _remove_temp(temp_path) -> None:
        if temp_path and os.path.exists(temp_path):
            os.remove(temp_path)

    @classmethod
    def _parse_mapping(cls, raw: Any) -> CacheMapping:
        if not isinstance(raw, dict):
            raise CacheError(
                f"Cache must be a YAML dictionary, got {type(raw).__name__}"
            )

        mapping: CacheMapping = {}
        for space, titles in raw.items():
            if not isinstance(titles, dict):
                raise CacheError(
                    f"Entries for space '{space}' must be a dictionary, "
                    f"got {type(titles).__name__}"
                )
            parsed = {}
            for title, page_id in titles.items():
                # bool is an int subclass
                if isinstance(page_id, bool) or not isinstance(page_id, int) or page_id <= 0:
                    raise CacheError(
                        f"Page ID for '{title}' in space '{space}' must be a positive integer, "
                        f"got {page_id!r}"
                    )
                parsed[str(title)] = page_id
            mapping[str(space)] = parsed
        return mapping
