"""YAML configuration loading for the lokalise-sync CLI.

This module reads the optional project configuration file, merges it with
the credentials found in the environment and the command-line overrides,
and produces the immutable TaskConfig used by the sync tasks.

Configuration file structure (every key optional):
    project_id: "123.abc"
    branch: "develop"
    locales_path: "./config/locales"
    file_ext: [".yml", ".yaml"]
    skip_patterns: ["*_draft.yml"]
    max_retries_export: 5
    max_retries_import: 5
    import_safe_mode: true
    silent_mode: false
    export_opts: {detect_icu_plurals: true}
    import_opts: {indentation: "4sp"}
    use_oauth2_token: false
    connect_timeout: 5
    read_timeout: 30
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from src.lokalise_client.auth import Authenticator, Credentials
from src.sync_tasks.config import TaskConfig
from src.sync_tasks.strategies import NeverSkip, SkipByPattern

from .errors import ConfigFileError, ConfigNotFoundError

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Handles configuration file loading, validation and merging.

    Precedence, lowest to highest: built-in defaults, configuration file,
    environment variables (credentials only), command-line overrides.
    The API token is deliberately not accepted in the configuration file;
    it comes from LOKALISE_API_TOKEN (or .env) or the command line.
    """

    DEFAULT_CONFIG_PATH = '.lokalise-sync.yaml'

    # Allowed fields and their accepted types
    FIELD_TYPES: Dict[str, tuple] = {
        'project_id': (str,),
        'branch': (str,),
        'locales_path': (str,),
        'file_ext': (list,),
        'skip_patterns': (list,),
        'max_retries_export': (int,),
        'max_retries_import': (int,),
        'import_safe_mode': (bool,),
        'silent_mode': (bool,),
        'export_opts': (dict,),
        'import_opts': (dict,),
        'use_oauth2_token': (bool,),
        'connect_timeout': (int, float),
        'read_timeout': (int, float),
    }

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> Dict[str, Any]:
        """Load and validate the configuration file.

        Args:
            config_path: Path to the YAML file. If None, DEFAULT_CONFIG_PATH
                is used when it exists and an empty configuration otherwise.

        Returns:
            Dictionary of validated configuration values

        Raises:
            ConfigNotFoundError: If an explicit config_path does not exist
            ConfigFileError: If the file cannot be read or is invalid
        """
        if config_path is None:
            if not os.path.exists(cls.DEFAULT_CONFIG_PATH):
                logger.debug("No configuration file found, using defaults")
                return {}
            config_path = cls.DEFAULT_CONFIG_PATH

        # Read file
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise ConfigNotFoundError(config_path)
        except OSError as e:
            raise ConfigFileError(f"Cannot read {config_path}: {e}")

        # Parse YAML
        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigFileError(f"Invalid YAML syntax: {str(e)}")

        if config_dict is None:
            return {}

        if not isinstance(config_dict, dict):
            raise ConfigFileError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        logger.debug(f"Loaded configuration from {config_path}")
        return cls._validate(config_dict)

    @classmethod
    def _validate(cls, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Check field names and types.

        Raises:
            ConfigFileError: If a field is unknown or has the wrong type
        """
        for key, value in config_dict.items():
            if key == 'api_token':
                raise ConfigFileError(
                    "API token must not be stored in the configuration file, "
                    "set LOKALISE_API_TOKEN instead",
                    key
                )
            if key not in cls.FIELD_TYPES:
                raise ConfigFileError("Unknown configuration field", key)

            expected = cls.FIELD_TYPES[key]
            # bool is a subclass of int; reject it where a number is expected
            if isinstance(value, bool) and bool not in expected:
                raise ConfigFileError(f"Expected {expected[0].__name__}, got bool", key)
            if not isinstance(value, expected):
                raise ConfigFileError(
                    f"Expected {expected[0].__name__}, got {type(value).__name__}",
                    key
                )

        for key in ('file_ext', 'skip_patterns'):
            if key in config_dict and not all(isinstance(v, str) for v in config_dict[key]):
                raise ConfigFileError("All entries must be strings", key)

        return dict(config_dict)

    @classmethod
    def build(
        cls,
        file_values: Optional[Dict[str, Any]] = None,
        credentials: Optional[Credentials] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> TaskConfig:
        """Merge configuration sources into a TaskConfig.

        Args:
            file_values: Values returned by ``load``
            credentials: Credentials from the environment (default: Authenticator)
            overrides: Command-line values; None entries are ignored

        Returns:
            TaskConfig ready to be passed to a task

        Raises:
            ConfigFileError: If the merged values are invalid
        """
        values: Dict[str, Any] = dict(file_values or {})
        if credentials is None:
            credentials = Authenticator().get_credentials()

        # Environment credentials fill gaps left by the file
        values['api_token'] = credentials.api_token
        if credentials.project_id and not values.get('project_id'):
            values['project_id'] = credentials.project_id
        if credentials.branch and not values.get('branch'):
            values['branch'] = credentials.branch

        for key, value in (overrides or {}).items():
            if value is not None:
                values[key] = value

        skip_patterns = values.pop('skip_patterns', None) or []
        values['skip_file_export'] = SkipByPattern(skip_patterns) if skip_patterns else NeverSkip()

        if 'locales_path' in values:
            values['locales_path'] = Path(values['locales_path']).expanduser().resolve()
        if 'file_ext' in values:
            values['file_ext'] = tuple(values['file_ext'])

        try:
            return TaskConfig(**values)
        except (TypeError, ValueError) as e:
            raise ConfigFileError(str(e))
