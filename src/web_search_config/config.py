"""
Configuration loading for web search settings.

This module loads web search configuration from YAML files or dictionaries,
with support for environment variable substitution. The search settings may
live at the top level of the document or under a ``search`` key.
"""

import os
import re
import yaml
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Union

from .exceptions import ConfigurationError
from .models import SearchConfig
from .settings import resolve_search_provider

_SEARCH_FIELDS = {f.name for f in fields(SearchConfig)}

_SECTION_FIELDS = {
    "perplexity": {"api_key", "base_url", "model"},
    "serpapi": {"api_key", "engine"},
}


class ConfigurationLoader:
    """
    Loads and validates YAML configuration files for web search.

    Supports environment variable substitution using ${VAR_NAME} or ${VAR_NAME:default_value} syntax.
    """

    def __init__(self):
        """Initialize the configuration loader."""
        self._env_var_pattern = re.compile(r'\$\{([^}:]+)(?::([^}]*))?\}')

    def load_from_file(self, config_path: Union[str, Path]) -> SearchConfig:
        """
        Load configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            SearchConfig: Validated search configuration

        Raises:
            ConfigurationError: If the file cannot be loaded or configuration is invalid
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        if not config_path.is_file():
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_path, 'r', encoding='utf-8') as file:
                raw_config = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML configuration: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file: {e}")

        if raw_config is None:
            raise ConfigurationError("Configuration file is empty")

        if not isinstance(raw_config, dict):
            raise ConfigurationError("Configuration must be a YAML object/dictionary")

        return self.load_from_dict(raw_config)

    def load_from_dict(self, config_dict: Dict[str, Any]) -> SearchConfig:
        """
        Load configuration from a dictionary.

        Args:
            config_dict: Configuration dictionary

        Returns:
            SearchConfig: Validated search configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        processed_config = self._substitute_environment_variables(config_dict)
        return self._create_search_config(processed_config)

    def validate_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """
        Validate a configuration file without returning the configuration.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            Dict containing validation results with keys:
            - is_valid: bool
            - errors: List[str]
            - warnings: List[str]
        """
        try:
            config = self.load_from_file(config_path)
        except ConfigurationError as e:
            return {
                "is_valid": False,
                "errors": [str(e)],
                "warnings": []
            }

        warnings = []
        provider = resolve_search_provider(config).value
        for section in ("perplexity", "serpapi"):
            if provider != section and getattr(config, section):
                warnings.append(f"'{section}' settings are ignored while provider is '{provider}'")
        return {
            "is_valid": True,
            "errors": [],
            "warnings": warnings
        }

    def _substitute_environment_variables(self, obj: Any) -> Any:
        """
        Recursively substitute environment variables in configuration objects.

        Args:
            obj: Configuration object (dict, list, str, or other)

        Returns:
            Object with environment variables substituted
        """
        if isinstance(obj, dict):
            return {key: self._substitute_environment_variables(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._substitute_environment_variables(item) for item in obj]
        elif isinstance(obj, str):
            return self._substitute_env_vars_in_string(obj)
        else:
            return obj

    def _substitute_env_vars_in_string(self, text: str) -> str:
        """
        Substitute environment variables in a string.

        Unset variables without a default become an empty string, so a key
        written as ${SERPAPI_API_KEY} simply counts as not configured.
        """
        def replace_var(match):
            var_name = match.group(1)
            default_value = match.group(2)

            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            elif default_value is not None:
                return default_value
            else:
                return ""

        return self._env_var_pattern.sub(replace_var, text)

    def _create_search_config(self, config_dict: Dict[str, Any]) -> SearchConfig:
        """
        Create and validate a SearchConfig from a configuration dictionary.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        section = config_dict.get("search", config_dict)
        if not isinstance(section, dict):
            raise ConfigurationError("'search' section must be a dictionary")

        unknown_fields = sorted(str(key) for key in set(section) - _SEARCH_FIELDS)
        if unknown_fields:
            raise ConfigurationError(f"Unknown search setting(s): {', '.join(unknown_fields)}")

        for name, allowed in _SECTION_FIELDS.items():
            sub_section = section.get(name)
            if sub_section is None:
                continue
            if not isinstance(sub_section, dict):
                raise ConfigurationError(f"'{name}' section must be a dictionary")
            unknown = sorted(set(sub_section) - allowed)
            if unknown:
                raise ConfigurationError(f"Unknown field(s) in '{name}' section: {', '.join(unknown)}")

        try:
            search_config = SearchConfig.from_dict(section)
            validation_errors = search_config.validate()
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"Failed to create search configuration: {e}")

        if validation_errors:
            error_message = "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in validation_errors)
            raise ConfigurationError(error_message)

        return search_config


def load_config(config_path: Union[str, Path]) -> SearchConfig:
    """
    Convenience function to load configuration from a file.

    Raises:
        ConfigurationError: If configuration cannot be loaded or is invalid
    """
    loader = ConfigurationLoader()
    return loader.load_from_file(config_path)


def validate_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Convenience function to validate a configuration file."""
    loader = ConfigurationLoader()
    return loader.validate_config_file(config_path)
